"""
account_service tests

Covers the HTTP API (`main.py`, `routes/api.py`), the auth service core
(`service.py`), validation rules, token issuance/revocation, the credential
store, the event logger and database initialization.
"""
