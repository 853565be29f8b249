"""v1 router package — all /api/v1/* endpoints live here.

Files:
  vendors.py        — vendor CRUD, status, validation, balance, contacts
  payment_terms.py  — payment-terms catalog

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
