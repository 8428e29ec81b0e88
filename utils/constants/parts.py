"""Part categories, component slots, and storefront constants."""

# Keys are folded with fold_category_key(); values are the labels shown to users.
PART_DISPLAY_LABELS = {
    "cpu": "CPU",
    "processor": "CPU",
    "processors": "CPU",
    "gpu": "GPU",
    "graphics_card": "GPU",
    "graphics_cards": "GPU",
    "video_card": "GPU",
    "video_cards": "GPU",
    "ram": "RAM",
    "memory": "RAM",
    "motherboard": "Motherboard",
    "motherboards": "Motherboard",
    "storage": "Storage",
    "cpu_cooler": "CPU Cooler",
    "cpu_coolers": "CPU Cooler",
    "psu": "Power Supply",
    "power_supply": "Power Supply",
    "power_supplies": "Power Supply",
    "case": "Case",
    "pc_case": "Case",
    "cases": "Case",
}

# Legacy flat favorites rows carry <slot>_name / <slot>_price / <slot>_id.
COMPONENT_SLOTS = (
    ("cpu", "CPU"),
    ("gpu", "GPU"),
    ("ram", "RAM"),
    ("motherboard", "Motherboard"),
    ("storage", "Storage"),
    ("cpu_cooler", "CPU Cooler"),
    ("case", "Case"),
    ("psu", "PSU"),
)

DEFAULT_CATEGORY = "Uncategorized"

IMAGE_TRACKING_SUFFIX = "&width=1"

PRODUCT_BASE_URL = "https://pcx.com.ph"


def fold_category_key(label: str) -> str:
    """Fold a category label into the lookup form used by PART_DISPLAY_LABELS."""
    return "_".join(label.strip().lower().replace("-", " ").split())
