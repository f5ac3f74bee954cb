# Game data: pydantic models and JSON loaders
