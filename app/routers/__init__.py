"""Routers package — endpoint definitions.

Files:
  v1/     — Versioned REST routes (/api/v1/*)
  rpc.py  — VendorsService RPC contract (/rpc/VendorsService/*), authenticated
"""
