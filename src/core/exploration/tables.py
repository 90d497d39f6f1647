"""탐색 결과 콘텐츠 테이블 + 확률 대역"""

# === 대역 폭 (이 순서대로 [0,1) 을 분할) ===
ENCOUNTER_WIDTH_PER_DANGER = 0.1  # 위험도 1 → 0.1, 5 → 0.5

# 표의 폭. 합이 encounter 이후 구간을 넘으면 이 비율(nothing 포함)로 압축한다
ITEM_WIDTH = 0.35
RESOURCE_WIDTH = 0.25
SPECIAL_PLACE_WIDTH = 0.15
NOTHING_WIDTH = 0.15

MIN_DANGER_LEVEL = 1
MAX_DANGER_LEVEL = 5

DEFAULT_STAMINA_COST = 5

FOUND_ITEMS: tuple[str, ...] = (
    "Rusty Dagger",
    "Healing Herb",
    "Old Coin",
    "Torn Map",
    "Leather Pouch",
    "Copper Ring",
    "Small Mana Vial",
    "Travel Rations",
)

FOUND_RESOURCES: tuple[str, ...] = (
    "Iron Ore",
    "Oak Wood",
    "Wild Berries",
    "Flint",
    "Medicinal Moss",
    "Clay",
)

SPECIAL_PLACES: tuple[str, ...] = (
    "an ancient altar",
    "an abandoned camp",
    "a smugglers' cache",
    "a small cave",
    "a ruined tower",
    "a strange monolith",
)

NOTHING_MESSAGES: tuple[str, ...] = (
    "You found nothing in this part of the area",
    "There is nothing of interest here",
    "Your search was fruitless",
    "This area seems empty",
    "You look around but discover nothing",
)

INSUFFICIENT_STAMINA_MESSAGE = "Not enough stamina to explore"
