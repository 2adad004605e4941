"""
API server package — HTTP interface for the Chainhook provider and the dashboard.

POST /webhook ingests provider notifications; GET /events, /stats and
/health serve the polling dashboard from the in-memory event store.
"""
