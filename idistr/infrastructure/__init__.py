"""Infrastructure adapters: backend gateway, local storage, receipts."""
