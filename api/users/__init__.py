"""
User accounts: records, data access and the self-service/admin rules.
"""
