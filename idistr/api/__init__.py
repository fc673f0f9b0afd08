"""HTTP API for the mini-app client."""
