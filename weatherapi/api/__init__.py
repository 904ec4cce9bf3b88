"""HTTP API: application factory, routes and middleware."""
