# halaleco/rules/tables.py
"""
Static lookup data for the rule engines.

Everything here is built once at import and exposed read-only
(tuples and MappingProxyType), so request handlers can share it freely.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

# -----------------------------
# Ingredient lists (compliance path)
# -----------------------------
HARAM_INGREDIENTS: Tuple[str, ...] = (
    # animal-derived
    "pork",
    "bacon",
    "ham",
    "lard",
    "pork fat",
    "pork gelatin",
    "pepsin",
    "rennet",
    "carmine",
    "cochineal",
    "shellac",
    # alcohol and derivatives
    "alcohol",
    "ethanol",
    "wine",
    "beer",
    "rum",
    "whiskey",
    "vanilla extract",
    "wine vinegar",
    "cooking wine",
    # non-halal animal derivatives
    "non-halal gelatin",
    "non-halal collagen",
    "non-halal tallow",
    # also listed as mushbooh; prohibited wins
    "mono and diglycerides",
    "lecithin",
    "glycerin",
    "stearic acid",
)

MUSHBOOH_INGREDIENTS: Tuple[str, ...] = (
    "mono and diglycerides",
    "lecithin",
    "glycerin",
    "stearic acid",
    "natural flavors",
    "artificial flavors",
    "enzymes",
    "emulsifiers",
)

INGREDIENT_ALTERNATIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "pork": ("Halal beef", "Halal chicken", "Halal lamb"),
    "bacon": ("Halal beef bacon", "Turkey bacon", "Chicken strips"),
    "lard": ("Vegetable oil", "Coconut oil", "Olive oil"),
    "gelatin": ("Halal gelatin", "Agar-agar", "Pectin", "Carrageenan"),
    "alcohol": ("Natural extracts", "Halal vanilla", "Fruit concentrates"),
    "wine vinegar": ("Apple cider vinegar", "Rice vinegar", "Halal vinegar"),
    "mono and diglycerides": ("Halal-certified emulsifiers", "Lecithin (plant-based)"),
    "natural flavors": ("Halal-certified natural flavors", "Specific flavor extracts"),
})

# -----------------------------
# Quick validator (/validate-halal) keeps its own list
# -----------------------------
VALIDATOR_HARAM_INGREDIENTS: Tuple[str, ...] = (
    "pork",
    "bacon",
    "ham",
    "lard",
    "gelatin",
    "alcohol",
    "wine",
    "beer",
    "vanilla extract",
    "rum flavoring",
    "wine vinegar",
    "pepsin",
    "rennet",
    "carmine",
    "cochineal",
    "shellac",
)

VALIDATOR_PRODUCT_ALTERNATIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "beef sausages": ("Halal beef sausages", "Chicken sausages", "Turkey sausages"),
    "gelatin": ("Halal gelatin", "Agar-agar", "Pectin"),
    "vanilla extract": ("Halal vanilla extract", "Vanilla powder", "Natural vanilla"),
})

# -----------------------------
# Certification authorities
# -----------------------------
# order matters: "MUIS" must be tried before "MUI"
AUTHORITY_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("JAKIM", "JAKIM Malaysia"),
    ("MUIS", "MUIS Singapore"),
    ("HFA", "HFA UK"),
    ("IFANCA", "IFANCA USA"),
    ("HFCE", "HFCE Canada"),
    ("AHCFI", "AHCFI Australia"),
    ("ESMA", "ESMA UAE"),
    ("MUI", "MUI Indonesia"),
    ("SANHA", "SANHA South Africa"),
    ("HMC", "HMC UK"),
    ("ISWA", "ISWA USA"),
)

LEDGER_VALID_PREFIXES: Tuple[str, ...] = ("JAKIM", "HALAL")

UNKNOWN_AUTHORITY = "Unknown Authority"
NOT_CERTIFIED = "Not Certified"

SLAUGHTER_CERTIFIERS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("malaysia",), "JAKIM Malaysia"),
    (("singapore",), "MUIS Singapore"),
    (("indonesia",), "MUI Indonesia"),
    (("australia",), "AHCFI Australia"),
    (("usa", "america"), "IFANCA USA"),
    (("canada",), "HFCE Canada"),
    (("uk", "britain"), "HFA UK"),
)

SLAUGHTER_KEYWORDS: Tuple[str, ...] = ("halal", "zabiha", "dhabiha")

SLAUGHTER_REQUIREMENTS: Tuple[str, ...] = (
    "Animal must be alive and healthy at time of slaughter",
    "Slaughter must be performed by Muslim",
    "Bismillah must be recited",
    "Sharp knife must be used",
    "Blood must be completely drained",
)

# -----------------------------
# Product alternatives (compliance path)
# -----------------------------
PRODUCT_ALTERNATIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "gummy": ("Halal gummy bears", "Fruit snacks with halal gelatin", "Agar-based gummies"),
    "chocolate": ("Halal-certified chocolate", "Dark chocolate (dairy-free)", "Carob chocolate"),
    "cheese": ("Halal cheese", "Plant-based cheese", "Cashew cheese"),
    "yogurt": ("Halal yogurt", "Coconut yogurt", "Almond yogurt"),
    "bread": ("Halal-certified bread", "Homemade bread", "Sourdough bread"),
    "cookie": ("Halal cookies", "Homemade cookies", "Vegan cookies"),
    "cake": ("Halal-certified cake", "Eggless cake", "Vegan cake"),
})

# "{product}" is substituted at lookup time
CATEGORY_ALTERNATIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "meat": (
        "Halal-certified {product}",
        "Halal chicken alternative",
        "Halal beef alternative",
        "Plant-based protein alternative",
    ),
    "dairy": (
        "Halal-certified {product}",
        "Plant-based dairy alternative",
        "Coconut-based alternative",
        "Oat-based alternative",
    ),
})

# -----------------------------
# Pricing
# -----------------------------
CATEGORY_BASE_PRICES: Mapping[str, float] = MappingProxyType({
    "food": 15.0,
    "cosmetics": 25.0,
    "supplements": 35.0,
    "clothing": 45.0,
    "electronics": 150.0,
})
DEFAULT_BASE_PRICE = 20.0

# -----------------------------
# Text analysis
# -----------------------------
SUSPICIOUS_KEYWORDS: Tuple[str, ...] = (
    "guaranteed halal",
    "100% authentic",
    "limited time",
    "urgent sale",
    "no questions asked",
    "cash only",
    "final sale",
    "as seen on tv",
    "miracle",
    "instant results",
    "secret formula",
    "government approved",
)

# (regex, label)
CLAIM_PATTERNS: Tuple[Tuple[str, str], ...] = (
    (r"100% (halal|authentic|natural|organic)", "100% guarantee claim"),
    (r"certified by", "Certification claim"),
    (r"award.winning", "Award winning claim"),
    (r"doctor recommended", "Medical endorsement claim"),
)

POSITIVE_WORDS: Tuple[str, ...] = ("excellent", "amazing", "perfect", "best", "great", "wonderful")
NEGATIVE_WORDS: Tuple[str, ...] = ("bad", "terrible", "awful", "worst", "horrible", "fake")
