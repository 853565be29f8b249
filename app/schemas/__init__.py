"""Pydantic schemas package.

Folder intent:
  common.py        — ApiModel base + HealthResponse (all schemas inherit ApiModel)
  vendor.py        — Vendor create / full-replace update / output, validation, balance delta
  contact.py       — Vendor contact create / output
  payment_term.py  — Payment-term catalog output
  rpc.py           — Request/response messages of the VendorsService RPC contract
"""
