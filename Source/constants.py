from decimal import Decimal

from config import CURRENCY_PLACES

DECIMAL_QUANTIZE = Decimal(1).scaleb(-CURRENCY_PLACES)

# Bill categories
CATEGORY_FOOD = 'food'
CATEGORY_ACCOMMODATION = 'accommodation'
CATEGORY_ENTERTAINMENT = 'entertainment'
CATEGORY_SPORTS = 'sports'

CATEGORIES = [
    CATEGORY_FOOD,
    CATEGORY_ACCOMMODATION,
    CATEGORY_ENTERTAINMENT,
    CATEGORY_SPORTS,
]

# Categories where every line item carries its own assignees
ITEMIZED_CATEGORIES = {CATEGORY_FOOD, CATEGORY_ENTERTAINMENT}

# Surcharge names per category
SURCHARGE_FIELDS = {
    CATEGORY_FOOD: ['tax', 'tip'],
    CATEGORY_ENTERTAINMENT: ['additional'],
    CATEGORY_ACCOMMODATION: [],
    CATEGORY_SPORTS: [],
}

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'BGN': 'лв',
}

# Currencies written with the symbol before the amount
PREFIX_CURRENCIES = ['USD', 'EUR', 'GBP']

SELF_ID = 'me'

DEFAULT_FRIENDS = [
    ('me', 'Me (You)'),
    ('friend1', 'John Smith'),
    ('friend2', 'Sarah Davis'),
    ('friend3', 'Mike Johnson'),
    ('friend4', 'Emma Wilson'),
]
