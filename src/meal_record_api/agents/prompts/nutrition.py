"""Nutrition estimation prompt templates.

The wording here is read by the model and parsed back by
``services.nutrition.extractor``. Bump NUTRITION_PROMPT_VERSION on any change.
"""

from dataclasses import dataclass

from meal_record_api.models.meal import MealQuery

NUTRITION_PROMPT_VERSION = "2024-11-v3"

# Literal the model must answer with when the input is not a food.
UNANSWERABLE_TOKEN = "None"

NUTRITION_SYSTEM_PROMPT = f"""You are a nutritionist who estimates the nutritional content of foods.

Follow these steps in order:

1. Decide whether the input names a real food or drink.
   If it does not (a place, an event, a person, random text, ...), respond with exactly
   {UNANSWERABLE_TOKEN}
   and nothing else.
2. Estimate the typical serving size of the food in grams.
3. Estimate the average amount, in grams, of starch, sugar, dietary fiber, protein and fat
   for the requested quantity. Carbohydrate is the sum of starch + sugar + dietaryFiber.
4. Respond ONLY with a JSON object in this exact form:
{{
  "surving_size": <grams>,
  "carbohydrate": <grams>,
  "starch": <grams>,
  "sugar": <grams>,
  "dietaryFiber": <grams>,
  "protein": <grams>,
  "fat": <grams>
}}

Rules:
- All values are plain numbers, without units.
- Do not include comments, explanations or any text outside the JSON."""

NUTRITION_USER_TEMPLATE = "Food name: {food_name}, Quantity: {quantity}"


@dataclass(frozen=True)
class NutritionPrompt:
    """System instruction and user message for one estimation call."""

    system: str
    user: str
    version: str = NUTRITION_PROMPT_VERSION


def build_nutrition_prompt(query: MealQuery) -> NutritionPrompt:
    """Render the prompt pair for a validated query."""
    return NutritionPrompt(
        system=NUTRITION_SYSTEM_PROMPT,
        user=NUTRITION_USER_TEMPLATE.format(
            food_name=query.food_name,
            quantity=query.quantity_label,
        ),
    )
