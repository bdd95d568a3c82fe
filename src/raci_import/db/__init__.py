"""PostgreSQL access: reference snapshot loading and create-plan commit."""
