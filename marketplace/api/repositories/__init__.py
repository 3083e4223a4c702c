# This file marks the repositories package for ledger table access.
# Each repository exposes only the query shapes the services use for one entity.
