"""Analysis pipeline services."""
