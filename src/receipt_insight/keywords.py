"""
Static keyword tables used to categorize receipts.
One table per signal channel, each mapping a category to lower-case substrings.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from .models import ReceiptCategory

KeywordTable = Mapping[ReceiptCategory, Tuple[str, ...]]

# Substrings looked for in the merchant name
MERCHANT_PATTERNS: KeywordTable = MappingProxyType({
    ReceiptCategory.GROCERIES: (
        "walmart", "target", "kroger", "safeway", "whole foods", "trader joe",
        "costco", "sam's club", "publix", "wegmans", "food lion", "giant",
        "supermarket", "grocery", "market", "food", "fresh", "organic",
    ),
    ReceiptCategory.DINING: (
        "mcdonald", "burger king", "subway", "starbucks", "dunkin", "kfc",
        "pizza hut", "domino", "taco bell", "chipotle", "panera", "chick-fil-a",
        "restaurant", "cafe", "bistro", "diner", "bar", "grill", "kitchen",
        "food truck", "bakery", "coffee", "pizza", "sushi", "mexican", "chinese",
    ),
    ReceiptCategory.TRANSPORTATION: (
        "shell", "exxon", "bp", "chevron", "mobil", "citgo", "sunoco",
        "uber", "lyft", "taxi", "bus", "metro", "train", "airline",
        "gas station", "fuel", "parking", "toll", "transit",
    ),
    ReceiptCategory.ELECTRONICS: (
        "best buy", "apple", "samsung", "microsoft", "amazon", "newegg",
        "fry's", "micro center", "radioshack", "gamestop", "electronic",
        "computer", "phone", "tablet", "laptop", "tv", "camera", "headphones",
    ),
    ReceiptCategory.CLOTHING: (
        "nike", "adidas", "gap", "h&m", "zara", "forever 21", "old navy",
        "macy's", "nordstrom", "jcpenney", "kohl's", "clothing", "fashion",
        "shoes", "apparel", "dress", "shirt", "pants", "jacket", "accessories",
    ),
    ReceiptCategory.HEALTHCARE: (
        "cvs", "walgreens", "rite aid", "pharmacy", "hospital", "clinic",
        "doctor", "dental", "medical", "health", "prescription", "medicine",
        "urgent care", "optometry", "physical therapy",
    ),
    ReceiptCategory.ENTERTAINMENT: (
        "amc", "regal", "cinemark", "netflix", "spotify", "steam", "xbox",
        "playstation", "nintendo", "movie", "theater", "cinema", "concert",
        "game", "entertainment", "music", "streaming", "subscription",
    ),
    ReceiptCategory.HOME_GARDEN: (
        "home depot", "lowe's", "ikea", "bed bath", "williams sonoma",
        "wayfair", "home goods", "furniture", "garden", "hardware",
        "appliance", "decor", "kitchen", "bathroom", "bedroom", "living room",
    ),
    ReceiptCategory.AUTOMOTIVE: (
        "autozone", "advance auto", "napa", "jiffy lube", "valvoline",
        "car wash", "mechanic", "auto", "vehicle", "car", "truck", "motorcycle",
        "oil change", "tire", "battery", "brake", "repair", "maintenance",
    ),
    ReceiptCategory.BUSINESS: (
        "office depot", "staples", "fedex", "ups", "post office", "bank",
        "office", "business", "professional", "supplies", "shipping",
        "printing", "conference", "meeting", "workspace",
    ),
    ReceiptCategory.TRAVEL: (
        "hotel", "motel", "airbnb", "booking", "expedia", "airline",
        "travel", "vacation", "trip", "flight", "accommodation", "resort",
        "car rental", "hertz", "enterprise", "budget", "avis",
    ),
    ReceiptCategory.EDUCATION: (
        "university", "college", "school", "bookstore", "library",
        "education", "tuition", "textbook", "course", "training",
        "certification", "workshop", "seminar", "academic",
    ),
    ReceiptCategory.UTILITIES: (
        "electric", "gas", "water", "internet", "phone", "cable",
        "utility", "bill", "service", "provider", "telecom", "energy",
    ),
    ReceiptCategory.MISCELLANEOUS: (),
})

# Substrings looked for in each line item name
ITEM_KEYWORDS: KeywordTable = MappingProxyType({
    ReceiptCategory.GROCERIES: (
        "milk", "bread", "eggs", "cheese", "meat", "chicken", "beef",
        "vegetables", "fruits", "cereal", "pasta", "rice", "flour",
        "sugar", "salt", "oil", "butter", "yogurt", "juice", "water",
        "snacks", "cookies", "chips", "candy", "frozen", "canned",
    ),
    ReceiptCategory.DINING: (
        "burger", "pizza", "sandwich", "salad", "soup", "coffee", "tea",
        "soda", "beer", "wine", "appetizer", "entree", "dessert",
        "breakfast", "lunch", "dinner", "meal", "combo", "fries",
    ),
    ReceiptCategory.TRANSPORTATION: (
        "gasoline", "diesel", "fuel", "oil", "car wash", "parking",
        "toll", "fare", "ticket", "ride", "trip", "mileage",
    ),
    ReceiptCategory.ELECTRONICS: (
        "iphone", "android", "laptop", "desktop", "tablet", "tv",
        "monitor", "keyboard", "mouse", "headphones", "speakers",
        "camera", "battery", "charger", "cable", "software", "app",
    ),
    ReceiptCategory.CLOTHING: (
        "shirt", "pants", "dress", "shoes", "jacket", "coat", "hat",
        "socks", "underwear", "belt", "bag", "purse", "jewelry",
        "watch", "sunglasses", "scarf", "gloves", "shorts", "skirt",
    ),
    ReceiptCategory.HEALTHCARE: (
        "prescription", "medicine", "vitamins", "supplements", "bandages",
        "first aid", "thermometer", "blood pressure", "glucose",
        "consultation", "examination", "treatment", "therapy",
    ),
    ReceiptCategory.ENTERTAINMENT: (
        "movie", "ticket", "popcorn", "game", "subscription", "streaming",
        "music", "concert", "show", "event", "book", "magazine",
    ),
    ReceiptCategory.HOME_GARDEN: (
        "furniture", "table", "chair", "bed", "sofa", "lamp", "mirror",
        "curtains", "carpet", "paint", "tools", "hammer", "screwdriver",
        "plants", "seeds", "fertilizer", "pot", "garden", "lawn",
    ),
    ReceiptCategory.AUTOMOTIVE: (
        "oil change", "tire", "battery", "brake", "filter", "spark plug",
        "coolant", "transmission", "engine", "repair", "maintenance",
        "car wash", "wax", "polish", "air freshener",
    ),
    ReceiptCategory.BUSINESS: (
        "paper", "pen", "pencil", "notebook", "folder", "binder",
        "printer", "ink", "toner", "envelope", "stamp", "shipping",
        "office", "supplies", "meeting", "conference",
    ),
    ReceiptCategory.TRAVEL: (
        "hotel", "room", "flight", "luggage", "suitcase", "travel",
        "vacation", "trip", "tour", "guide", "map", "souvenir",
    ),
    ReceiptCategory.EDUCATION: (
        "textbook", "notebook", "pen", "pencil", "calculator", "backpack",
        "tuition", "course", "class", "workshop", "seminar", "training",
    ),
    ReceiptCategory.UTILITIES: (
        "electricity", "gas", "water", "internet", "phone", "cable",
        "service", "bill", "monthly", "usage", "connection",
    ),
    ReceiptCategory.MISCELLANEOUS: (),
})

# Substrings looked for anywhere in the raw receipt text
CONTEXT_KEYWORDS: KeywordTable = MappingProxyType({
    ReceiptCategory.GROCERIES: (
        "grocery", "supermarket", "fresh", "organic", "produce", "deli",
        "bakery", "dairy", "frozen", "canned goods", "checkout",
    ),
    ReceiptCategory.DINING: (
        "restaurant", "cafe", "dine in", "take out", "delivery", "tip",
        "server", "table", "order", "menu", "kitchen", "chef",
    ),
    ReceiptCategory.TRANSPORTATION: (
        "station", "pump", "gallon", "liter", "mileage", "vehicle",
        "license", "registration", "inspection", "emissions",
    ),
    ReceiptCategory.ELECTRONICS: (
        "warranty", "tech support", "installation", "upgrade", "software",
        "hardware", "digital", "wireless", "bluetooth", "wifi",
    ),
    ReceiptCategory.CLOTHING: (
        "size", "color", "fashion", "style", "brand", "designer",
        "season", "collection", "fitting", "alteration", "return",
    ),
    ReceiptCategory.HEALTHCARE: (
        "health", "medical", "doctor", "nurse", "patient", "treatment",
        "diagnosis", "symptom", "medication", "dosage", "prescription",
    ),
    ReceiptCategory.ENTERTAINMENT: (
        "entertainment", "fun", "leisure", "hobby", "recreation",
        "performance", "show", "event", "ticket", "admission",
    ),
    ReceiptCategory.HOME_GARDEN: (
        "home improvement", "renovation", "decoration", "interior",
        "exterior", "landscape", "gardening", "lawn care", "maintenance",
    ),
    ReceiptCategory.AUTOMOTIVE: (
        "automotive", "vehicle", "car care", "maintenance", "repair",
        "service", "mechanic", "garage", "dealership", "parts",
    ),
    ReceiptCategory.BUSINESS: (
        "business", "office", "professional", "corporate", "company",
        "organization", "meeting", "conference", "presentation",
    ),
    ReceiptCategory.TRAVEL: (
        "travel", "vacation", "trip", "journey", "destination",
        "booking", "reservation", "check-in", "check-out", "luggage",
    ),
    ReceiptCategory.EDUCATION: (
        "education", "learning", "study", "academic", "school",
        "university", "college", "course", "degree", "certification",
    ),
    ReceiptCategory.UTILITIES: (
        "utility", "service", "monthly", "bill", "account", "usage",
        "meter", "connection", "provider", "customer",
    ),
    ReceiptCategory.MISCELLANEOUS: (),
})
