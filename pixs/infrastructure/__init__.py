"""Infrastructure adapters: storage, notifications, legacy data."""
