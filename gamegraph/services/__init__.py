"""
Services - graph store client, interaction recording, recommendations, catalog sync

Modules are imported directly (gamegraph.services.neo4j_service, ...) so
that repositories can depend on the store client without import cycles.
"""
