"""Key-value configuration store backed by SQLAlchemy."""
