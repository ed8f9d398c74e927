"""
Stockkeeper Admin with Unfold theme.

Add 'stockkeeper.contrib.admin_unfold' to INSTALLED_APPS after 'unfold'
and 'stockkeeper'. The basic admin in stockkeeper.admin then stays out
of the way.
"""
