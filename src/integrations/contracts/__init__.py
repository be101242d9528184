"""
Contracts (data models).

This folder defines the shapes exchanged with catalogue backends:
- Product / Comment / ProductFormData records
- The CatalogClient interface both backends implement
- Typed outcomes returned by the persistence facade

Both the remote HTTP client and the local store client use these contracts,
so the state layer never has to know which backend answered.
"""
