"""
Local integration clients.

These clients answer catalogue operations from on-device storage without any
network access. They are used when:
- the remote collection API is down, slow or rejecting requests
- we want to run the catalogue end-to-end in tests or on a laptop

Important:
- Local clients must follow the SAME CatalogClient interface as the HTTP client.
- Local clients return data shaped according to src/integrations/contracts/*
"""
