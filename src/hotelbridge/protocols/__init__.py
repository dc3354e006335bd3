"""Protocol layer — JSON-RPC envelope handling and shared error types."""
