"""
Utility modules for SalesHub

Import directly:
    from saleshub.utils.helpers import retry_async, safe_json_dumps
"""
