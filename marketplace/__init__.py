"""
Package marker for the freelance marketplace ledger service.
It groups the HTTP layer (`marketplace.api`) and shared helpers (`marketplace.common`) under one import path.
Most functionality lives in the sibling modules; this file intentionally stays lightweight.
"""
