"""Services package — all business logic lives here, never in routers.

Files:
  rules.py         — validation / normalization rules and the invoice-eligibility check
  vendor.py        — vendor CRUD, status changes, balance adjustment
  contact.py       — vendor contacts (append-only)
  payment_term.py  — payment-terms catalog
  obligations.py   — open-obligations hook consulted before delete / deactivate

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
