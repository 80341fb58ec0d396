"""HTTP primitives: Request, Response, typed extensions, query decoding."""
