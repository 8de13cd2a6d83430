from typing import Dict, FrozenSet, List

# Category slug -> related keywords a shopper might type instead of the category name
CATEGORY_SYNONYMS: Dict[str, List[str]] = {
    "mobiles": ["phone", "smartphone", "mobile", "cell", "iphone", "android", "samsung", "oneplus", "xiaomi", "realme", "oppo", "vivo"],
    "electronics": ["gadget", "device", "electronic", "tech", "technology"],
    "fashion": ["clothing", "clothes", "wear", "apparel", "dress", "shirt", "pant", "jeans", "tshirt", "t-shirt"],
    "home": ["furniture", "decor", "decoration", "household", "kitchen", "bedroom", "living"],
    "appliances": ["appliance", "washing", "fridge", "refrigerator", "ac", "microwave", "oven"],
    "books": ["book", "novel", "textbook", "reading", "literature"],
    "toys": ["toy", "game", "kids", "children", "play"],
    "sports": ["sport", "fitness", "gym", "exercise", "athletic"],
    "beauty": ["cosmetic", "makeup", "skincare", "beauty", "grooming"],
    "groceries": ["grocery", "food", "snack", "beverage", "drink"],
}

_FROZEN: Dict[str, FrozenSet[str]] = {slug: frozenset(words) for slug, words in CATEGORY_SYNONYMS.items()}

def synonyms_for(slug: str) -> FrozenSet[str]:
    return _FROZEN.get((slug or "").lower(), frozenset())
