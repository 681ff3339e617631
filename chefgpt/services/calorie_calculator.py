"""
Daily calorie target arithmetic.

BMR uses the Mifflin-St Jeor equation, scaled by a fixed activity
multiplier to get total daily energy expenditure. Range checks on the
inputs belong to the request models.
"""
from typing import Optional

from chefgpt.models.nutrition import CalorieTarget, CalorieTargetRequest


ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
    "extremely_active": 1.9,
}

# Upper bounds, checked in order
BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
]


def _value(item) -> str:
    # Accept both enum members and plain strings
    return str(getattr(item, "value", item)).strip().lower()


def calculate_bmr(sex, weight_kg: float, height_cm: float, age: int) -> float:
    """
    Basal metabolic rate in kcal/day.

    Args:
        sex: "male" or anything else (treated as female)
        weight_kg: Body weight in kilograms
        height_cm: Height in centimetres
        age: Age in years

    Returns:
        BMR, unrounded
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    offset = 5 if _value(sex) == "male" else -161
    return base + offset


def activity_multiplier(level) -> float:
    """Look up the TDEE multiplier; hyphenated names are accepted."""
    key = _value(level).replace("-", "_").replace(" ", "_")
    try:
        return ACTIVITY_MULTIPLIERS[key]
    except KeyError:
        raise ValueError(f"Unknown activity level: {level!r}") from None


def calculate_daily_calories(
    sex=None,
    weight_kg: Optional[float] = None,
    height_cm: Optional[float] = None,
    age: Optional[int] = None,
    activity_level="sedentary",
    override: Optional[int] = None
) -> int:
    """
    Daily calorie target: the override when given, otherwise BMR x activity.
    """
    if override is not None:
        return int(override)
    if None in (sex, weight_kg, height_cm, age):
        raise ValueError("sex, weight, height and age are required without an override")
    bmr = calculate_bmr(sex, weight_kg, height_cm, age)
    return round(bmr * activity_multiplier(activity_level))


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return round(weight_kg / (height_m ** 2), 1)


def bmi_category(bmi: float) -> str:
    for upper, label in BMI_CATEGORIES:
        if bmi < upper:
            return label
    return "Obese"


def calculate_calorie_target(req: CalorieTargetRequest) -> CalorieTarget:
    """Build the full CalorieTarget record for a request."""
    bmi = calculate_bmi(req.weight, req.height)

    if req.override is not None:
        return CalorieTarget(
            dailyCalories=req.override,
            bmi=bmi,
            bmiCategory=bmi_category(bmi),
        )

    bmr = calculate_bmr(req.sex, req.weight, req.height, req.age)
    multiplier = activity_multiplier(req.activityLevel)
    return CalorieTarget(
        bmr=round(bmr, 1),
        activityMultiplier=multiplier,
        dailyCalories=round(bmr * multiplier),
        bmi=bmi,
        bmiCategory=bmi_category(bmi),
    )
