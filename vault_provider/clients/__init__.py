"""HTTP clients for talking to Vault: TLS setup, login, logical read/write."""
