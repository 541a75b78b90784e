"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from planner.domain.PlannedMeal import MealType
from planner.utilities.config import DEFAULT_HEADCOUNT, MAX_HEADCOUNT


class PlannedMealInput(BaseModel):
    """Schema for assigning a recipe to a meal slot."""
    recipe_id: str = Field(..., min_length=1)
    headcount: int = Field(DEFAULT_HEADCOUNT, ge=1, le=MAX_HEADCOUNT)
    day: int = Field(..., ge=0, le=6)
    meal_type: MealType = MealType.DINNER


class ManualItemInput(BaseModel):
    """Schema for adding an article to the shopping list by hand."""
    article_id: str = Field(..., min_length=1)
    quantity: float = Field(1.0, gt=0)


class ManualEditInput(BaseModel):
    """Schema for editing the displayed quantity of a shopping list item."""
    quantity: float = Field(..., ge=0)


class ArticleInput(BaseModel):
    """Schema for article creation."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    unit: str = Field(..., min_length=1, max_length=30)
    is_food: bool = True

    @field_validator('name', 'category', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError('Value cannot be blank')
        return v


class RecipeIngredientInput(BaseModel):
    article_id: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    is_optional: bool = False


class RecipeInput(BaseModel):
    """Schema for recipe creation. Zero ingredients is allowed (incomplete recipe)."""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    photo: Optional[str] = None
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()


class MergeArticlesInput(BaseModel):
    """Schema for folding a duplicate article into the one kept."""
    keep_id: str = Field(..., min_length=1)
    remove_id: str = Field(..., min_length=1)
