"""RPC handlers, one module per endpoint."""
