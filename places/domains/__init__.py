"""Domain layer: location models, fetch outcomes and the fetch error taxonomy.

Domain modules do no IO; clients and caches are injected from the
infrastructure layer.
"""
