"""Shared constants used across the quiz app."""

# Predefined catalog seeded into the topics table (and the memory backend).
DEFAULT_TOPICS: tuple[dict[str, str], ...] = (
    {"name": "Photosynthesis", "description": "How plants turn light into chemical energy."},
    {"name": "World War II", "description": "Causes, major events and consequences of the war."},
    {"name": "Python Programming", "description": "Core language features and the standard library."},
    {"name": "The Solar System", "description": "Planets, moons and the physics that binds them."},
    {"name": "Cell Biology", "description": "Structure and function of cells and organelles."},
    {"name": "Ancient Rome", "description": "From the Republic to the fall of the Western Empire."},
)

SESSION_ACTIVE = "active"
SESSION_COMPLETED = "completed"
