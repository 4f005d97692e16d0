"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (settings, outbound
HTTP, caching, legacy Hebrew encoding, HTML extraction, error mapping).
Keep source-specific parsing and business logic in the corresponding feature
package (e.g. `jokes/`).
"""
