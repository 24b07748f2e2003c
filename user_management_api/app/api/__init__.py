"""
HTTP layer of the service.

``router`` aggregates the domain routers found in ``endpoints`` and is
mounted by ``main.create_app`` under the ``/api`` prefix.  Handlers
translate requests into ``UserService`` calls and service outcomes into
status codes; they hold no business rules.
"""
