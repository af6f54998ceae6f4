"""HTTP layer - dependencies, error translation and routers."""
