"""HTTP layer: response envelope, static file gate and routers."""
