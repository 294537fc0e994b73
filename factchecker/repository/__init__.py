"""Repository layer: DB access helpers.

Keep functions thin and focused, so services avoid SQL strings. Each entity
module declares its column translation table (COLUMNS) and, where it can be
searched, its filter rules (FILTERS) for the builders in ``sql``.
"""
