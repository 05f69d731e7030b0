"""HTTP routers for the gateway."""
