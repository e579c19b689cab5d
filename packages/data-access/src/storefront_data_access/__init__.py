"""Data Access: the account store and the discount store over Azure SQL."""
