"""HTTP plumbing: problem+json handlers and request-id middleware."""
