"""
Packing list generation.

Lists are assembled from static lookup tables keyed by temperature band, weather condition,
activity and essentials category.
"""
import math

from models import PackingList, WeatherObservation

CLOTHING = {
    "hot": {
        "essential": [
            "Light cotton t-shirts", "Shorts", "Sundress/light dress", "Sandals",
            "Sunglasses", "Sun hat/cap", "Swimwear", "Light breathable underwear",
        ],
        "recommended": ["Light cardigan for AC", "Flip flops", "Beach cover-up", "Athletic wear for exercise"],
    },
    "warm": {
        "essential": [
            "T-shirts/casual tops", "Light pants/jeans", "Comfortable walking shoes", "Light jacket", "Sunglasses",
        ],
        "recommended": ["Shorts", "Sneakers", "Layers for temperature changes"],
    },
    "mild": {
        "essential": ["Long-sleeve shirts", "Jeans/pants", "Light sweater", "Comfortable shoes", "Light jacket"],
        "recommended": ["Layering pieces", "Scarf", "Closed-toe shoes"],
    },
    "cool": {
        "essential": [
            "Warm sweaters", "Long pants/jeans", "Warm jacket", "Closed-toe shoes", "Socks", "Long underwear",
        ],
        "recommended": ["Thermal layers", "Warm scarf", "Gloves", "Warm hat"],
    },
    "cold": {
        "essential": [
            "Winter coat/parka", "Thermal underwear", "Thick sweaters", "Warm pants", "Winter boots",
            "Thick socks", "Winter gloves", "Warm hat/beanie", "Scarf",
        ],
        "recommended": ["Hand warmers", "Face mask/balaclava", "Extra layers", "Waterproof boots"],
    },
}

WEATHER_GEAR = {
    "rainy": [
        "Waterproof jacket/raincoat", "Umbrella", "Waterproof shoes/boots", "Rain pants (optional)",
        "Waterproof bag cover",
    ],
    "sunny": [
        "Sunscreen (SPF 30+)", "After-sun lotion", "Sunglasses (UV protection)", "Sun hat",
        "Light, breathable clothing",
    ],
    "windy": ["Windbreaker", "Hair ties/clips", "Moisturizer (for dry skin)"],
    "humid": ["Breathable, moisture-wicking clothing", "Anti-chafing products", "Extra deodorant", "Quick-dry towel"],
}

ACTIVITY_GEAR = {
    "beach": [
        "Swimsuit (2-3)", "Beach towel", "Flip flops", "Waterproof phone case", "Beach bag", "Snorkel gear (optional)",
    ],
    "hiking": [
        "Hiking boots", "Moisture-wicking socks", "Backpack", "Water bottle", "Trail snacks", "First aid kit",
        "Map/GPS device", "Sunscreen", "Insect repellent",
    ],
    "business": [
        "Business suits/formal wear", "Dress shoes", "Laptop and charger", "Business cards",
        "Portfolio/briefcase", "Iron/steamer", "Professional accessories",
    ],
    "adventure": [
        "Sturdy shoes/boots", "Quick-dry clothing", "Action camera", "Multi-tool", "Headlamp/flashlight",
        "Portable charger",
    ],
    "culture": [
        "Comfortable walking shoes", "Day backpack", "Camera", "Guidebook/maps",
        "Modest clothing (for religious sites)", "Reusable water bottle",
    ],
}

ESSENTIALS = {
    "documents": [
        "Passport/ID", "Travel insurance documents", "Booking confirmations", "Emergency contacts list",
        "Copies of important documents",
    ],
    "toiletries": [
        "Toothbrush and toothpaste", "Shampoo and conditioner", "Body wash/soap", "Deodorant", "Skincare products",
        "Medications (prescription)", "First aid kit basics", "Nail clipper", "Razor",
    ],
    "electronics": ["Phone and charger", "Power bank", "Universal adapter", "Headphones", "Camera (optional)"],
    "miscellaneous": [
        "Reusable water bottle", "Snacks for travel", "Book/entertainment", "Travel pillow",
        "Eye mask and earplugs", "Plastic bags (for laundry)", "Small daypack",
    ],
}

# Slice sizes applied to a full list in minimal mode
MINIMAL_LIMITS = {
    "clothing": 3,
    "weather_gear": 1,
    "activities": 1,
    "activity_items": 3,
    "essentials": 2,
    "tips": 3,
}

PACKING_TIPS = [
    "Roll clothes to save space and reduce wrinkles",
    "Use packing cubes for organization",
    "Wear bulkiest items during travel",
]


def temperature_band(temp: float) -> str:
    if temp >= 30:
        return "hot"
    if temp >= 20:
        return "warm"
    if temp >= 10:
        return "mild"
    if temp >= 0:
        return "cool"
    return "cold"


def calculate_quantities(duration: int, band: str) -> dict:
    quantities = {
        "underwear": min(duration + 2, 10),
        "socks": min(duration + 1, 8),
        "tops": math.ceil(duration / 2) + 1,
        "bottoms": math.ceil(duration / 3) + 1,
        "outerwear": 2 if band == "cold" else 1,
    }
    if duration > 7:
        quantities["tops"] = min(quantities["tops"], 6)
        quantities["bottoms"] = min(quantities["bottoms"], 4)
    return quantities


def _duration_tips(duration: int) -> list:
    if duration <= 3:
        return ["Short trip - pack carry-on only", "Limit to 3 outfit combinations"]
    if duration <= 7:
        return ["Week-long trip - plan for laundry mid-trip", "Pack versatile pieces that mix and match"]
    return ["Extended trip - definitely plan for laundry", "Consider shipping heavy items ahead"]


def _truncate(packing: PackingList) -> PackingList:
    limits = MINIMAL_LIMITS
    return PackingList(
        clothing=packing.clothing[:limits["clothing"]],
        weather_gear=packing.weather_gear[:limits["weather_gear"]],
        activity_gear=[
            {"activity": entry["activity"], "items": entry["items"][:limits["activity_items"]]}
            for entry in packing.activity_gear[:limits["activities"]]
        ],
        essentials={key: items[:limits["essentials"]] for key, items in packing.essentials.items()},
        tips=packing.tips[:limits["tips"]],
        quantities=packing.quantities,
        mode="minimal",
    )


def generate_packing_list(observation: WeatherObservation, trip_details: dict, mode: str = "full") -> PackingList:
    """
    Build a packing list for the given weather and trip.

    `trip_details` may carry `duration` (days, default 7), `activities` and `style`.
    Weather gear conditions are independent, so one observation can add several groups.
    With `mode="minimal"` the full list is truncated to fixed slice sizes.
    """
    duration = trip_details.get("duration") or 7
    activities = trip_details.get("activities") or []

    band = temperature_band(observation.temp)
    packing = PackingList(clothing=CLOTHING[band]["essential"] + CLOTHING[band]["recommended"])

    if observation.rain_reported or observation.clouds > 70:
        packing.weather_gear += WEATHER_GEAR["rainy"]
        packing.tips.append("Rain is expected - pack waterproof items")
    if observation.temp > 25:
        packing.weather_gear += WEATHER_GEAR["sunny"]
        packing.tips.append("Hot weather - stay hydrated and protected from sun")
    if observation.wind_speed > 10:
        packing.weather_gear += WEATHER_GEAR["windy"]
    if observation.humidity > 70:
        packing.weather_gear += WEATHER_GEAR["humid"]
        packing.tips.append("High humidity - pack breathable fabrics")

    for activity in activities:
        items = ACTIVITY_GEAR.get(activity.strip().lower())
        if items:
            packing.activity_gear.append({"activity": activity, "items": list(items)})

    packing.essentials = {key: list(items) for key, items in ESSENTIALS.items()}
    packing.tips += _duration_tips(duration)
    packing.tips += PACKING_TIPS
    packing.quantities = calculate_quantities(duration, band)

    if mode == "minimal":
        return _truncate(packing)
    return packing


# Carry-on list with its own fixed quantities; duration does not change the contents.
def generate_minimal_list(observation: WeatherObservation, duration: int = 3) -> PackingList:
    band = temperature_band(observation.temp)
    return PackingList(
        clothing=CLOTHING[band]["essential"][:5],
        essentials={
            "documents": ESSENTIALS["documents"][:3],
            "toiletries": ["Travel-size toiletries", "Medications"],
            "electronics": ["Phone + charger", "Power bank"],
        },
        tips=[
            "Carry-on only - pack light!",
            "Wear bulkiest items on plane",
            "Plan to do laundry",
            "Limit to one small bag",
        ],
        quantities={"tops": 3, "bottoms": 2, "underwear": 4, "socks": 3, "outerwear": 1},
        mode="carry-on",
    )


def packing_checklist(packing: PackingList) -> list:
    checklist = []

    def _section(category, items):
        checklist.append({"category": category, "items": [{"name": item, "checked": False} for item in items]})

    if packing.clothing:
        _section("Clothing", packing.clothing)
    if packing.weather_gear:
        _section("Weather Gear", packing.weather_gear)
    for entry in packing.activity_gear:
        _section(f"{entry['activity']} Gear", entry["items"])
    for key, items in packing.essentials.items():
        _section(key.capitalize(), items)
    return checklist


def destination_tips(city: str, observation: WeatherObservation) -> list:
    tips = [
        "Check visa requirements for your destination",
        "Notify your bank of travel plans",
        "Download offline maps",
    ]
    if observation.temp > 30:
        tips.append("Pack electrolyte supplements for hot weather")
    if observation.rain_reported:
        tips.append("Download entertainment for indoor time")
    return tips
