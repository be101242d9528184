"""
Real HTTP integration clients.

These clients communicate with the remote catalogue collection API
(json-server style `/products` and `/comments` resources).

Important:
- Must implement the same CatalogClient interface as the local clients
- Must return data shaped according to src/integrations/contracts/*
- Must never fall back on their own; CatalogService decides what happens on failure
"""
