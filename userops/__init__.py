"""Create-then-delete user script against a SQLAlchemy database."""
