# This file marks the services package for ledger business logic.
# Routers depend on these service classes instead of touching repositories or SQL directly.
