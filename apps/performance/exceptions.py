"""
Errors raised by the query layer and translated to JSON by the views.
"""


class DashboardError(Exception):
    """Base class for dashboard query errors."""
    code = 'DASHBOARD_ERROR'


class NotFound(DashboardError):
    """No records exist for the requested district."""
    code = 'NOT_FOUND'


class UpstreamFailure(DashboardError):
    """The data store is unreachable or returned something unusable."""
    code = 'UPSTREAM_FAILURE'
