"""HTTP layer: API routes and static asset serving."""
