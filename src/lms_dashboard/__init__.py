"""LMS dashboard client.

Role-based (admin / teacher / student) list views and CRUD flows over the
LMS REST API: typed query hooks, DTO-to-record mapping, client-side
filter/sort/paginate and modal-style mutations.
"""

__version__ = "0.1.0"
