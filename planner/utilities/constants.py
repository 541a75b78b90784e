from typing import Final

DATE_FORMAT: Final[str] = "%d-%m-%Y %H:%M:%S"

# 0 = Monday
DAYS_OF_WEEK: Final[list[str]] = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]

# Key under which the planned meals live in the key-value store
PLANNED_MEALS_KEY: Final[str] = "plannedMeals"

DEFAULT_CATEGORY: Final[str] = "Autre"
UNKNOWN_ARTICLE_NAME: Final[str] = "Article inconnu"

# Units edited with a 0.1 step instead of 1
DECIMAL_UNITS: Final[set[str]] = {"kg", "l"}

# Recipe-side unit labels used by the conversion table
UNIT_GRAM: Final[str] = "g"
UNIT_MILLILITER: Final[str] = "ml"
UNIT_CENTILITER: Final[str] = "cl"
UNIT_PIECES: Final[str] = "pièce(s)"
UNIT_PINCH: Final[str] = "pincée(s)"
UNIT_TABLESPOON: Final[str] = "cuillère(s) à soupe"
UNIT_TEASPOON: Final[str] = "cuillère(s) à café"
UNIT_SPRIG: Final[str] = "branche(s)"
UNIT_LEAF: Final[str] = "feuille(s)"

# Approximate volumes
TABLESPOON_LITERS: Final[float] = 0.015
BUTTER_PLAQUETTE_GRAMS: Final[float] = 250.0
LEMON_JUICE_TEASPOONS: Final[float] = 3.0
