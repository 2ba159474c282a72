"""
HTTP layer of the content dashboard.

``router`` aggregates the resource routers, ``deps`` wires services to
the store held on the application state, ``responses`` builds the
uniform envelope and ``error_handlers`` translates every failure into
it.
"""
