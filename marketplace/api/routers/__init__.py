# This file marks the routers package for API route modules.
# The package groups endpoint modules by domain: contracts, jobs, balances, admin, and health.
