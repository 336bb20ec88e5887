"""Content addressing, party addresses, schemas and metadata documents."""
