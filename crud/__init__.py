from crud import parameters, plants, readings, users

__all__ = ["parameters", "plants", "readings", "users"]
