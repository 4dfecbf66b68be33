"""Infrastructure — IO adapters: database, book store, templates, logging."""
