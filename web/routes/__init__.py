"""
API route package

Router modules per feature:
- health: health check
- accounts: chart of accounts
- journal: journal entries (list, validate, create, update, delete)
- reports: trial balance and balance sheet
"""
