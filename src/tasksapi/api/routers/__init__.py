"""
tasksapi.api.routers

HTTP routers: health checks, accounts, tenant tasks and tenant label collections.
"""
