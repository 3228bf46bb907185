"""Values shared between fixtures and test modules."""

TEST_JWT_KEY = "test-signing-key-0123456789abcdef-0123456789"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123"
