"""Reference tables for turning recipe ingredients into purchase units."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from dietplanner.schemas import UnitSystem

WORD_PATTERN = re.compile(r"\w+")


@dataclass(frozen=True)
class ConversionEntry:
    """How one ingredient is bought: the size of a purchase unit and its names."""

    average_weight: float  # grams (or ml) per purchase unit
    unit: str
    plural_unit: str
    imperial_unit: str | None = None
    imperial_plural_unit: str | None = None
    keep_in_grams: bool = False

    def unit_name(self, system: UnitSystem, count: int) -> str:
        """Purchase unit name for a count in the given unit system."""
        if system == UnitSystem.IMPERIAL:
            singular = self.imperial_unit or self.unit
            plural = self.imperial_plural_unit or self.plural_unit
        else:
            singular, plural = self.unit, self.plural_unit
        return singular if count == 1 else plural


# Ingredient key -> purchase unit. Keys are matched after name normalization.
INGREDIENT_CONVERSIONS: dict[str, ConversionEntry] = {
    # Vegetables
    "pepino": ConversionEntry(200, "pepino", "pepinos", "cucumber", "cucumbers"),
    "tomate": ConversionEntry(150, "tomate", "tomates", "tomato", "tomatoes"),
    "tomate cherry": ConversionEntry(10, "tomate cherry", "tomates cherry", "cherry tomato", "cherry tomatoes"),
    "cebolla": ConversionEntry(150, "cebolla", "cebollas", "onion", "onions"),
    "zanahoria": ConversionEntry(100, "zanahoria", "zanahorias", "carrot", "carrots"),
    "papa": ConversionEntry(200, "papa", "papas", "potato", "potatoes"),
    "pimiento": ConversionEntry(200, "pimiento", "pimientos", "bell pepper", "bell peppers"),
    "calabacín": ConversionEntry(250, "calabacín", "calabacines", "zucchini", "zucchinis"),
    "calabaza": ConversionEntry(1000, "calabaza", "calabazas", "pumpkin", "pumpkins"),
    "berenjena": ConversionEntry(250, "berenjena", "berenjenas", "eggplant", "eggplants"),
    "lechuga": ConversionEntry(400, "lechuga", "lechugas", "lettuce head", "lettuce heads"),
    "apio": ConversionEntry(400, "apio", "apios", "celery", "celeries"),
    "brócoli": ConversionEntry(400, "brócoli", "brócolis", "broccoli head", "broccoli heads"),
    "coliflor": ConversionEntry(600, "coliflor", "coliflores", "cauliflower", "cauliflowers"),
    "espinaca": ConversionEntry(250, "bolsa", "bolsas", "bag", "bags"),
    "rúcula": ConversionEntry(100, "bolsa", "bolsas", "bag", "bags"),
    "acelga": ConversionEntry(400, "manojo", "manojos", "bunch", "bunches"),
    "espárragos": ConversionEntry(250, "manojo", "manojos", "bunch", "bunches"),
    "ejotes": ConversionEntry(250, "manojo", "manojos", "bunch", "bunches"),
    "champiñones": ConversionEntry(250, "bandeja", "bandejas", "package", "packages"),
    "setas shiitake": ConversionEntry(100, "bandeja", "bandejas", "package", "packages"),

    # Fruit
    "manzana": ConversionEntry(180, "manzana", "manzanas", "apple", "apples"),
    "plátano": ConversionEntry(120, "plátano", "plátanos", "banana", "bananas"),
    "naranja": ConversionEntry(200, "naranja", "naranjas", "orange", "oranges"),
    "limón": ConversionEntry(100, "limón", "limones", "lemon", "lemons"),
    "lima": ConversionEntry(80, "lima", "limas", "lime", "limes"),
    "aguacate": ConversionEntry(200, "aguacate", "aguacates", "avocado", "avocados"),
    "pera": ConversionEntry(170, "pera", "peras"),
    "durazno": ConversionEntry(150, "durazno", "duraznos"),
    "kiwi": ConversionEntry(100, "kiwi", "kiwis"),
    "frutos rojos": ConversionEntry(125, "bandeja", "bandejas"),
    "fresas": ConversionEntry(250, "bandeja", "bandejas"),
    "arándanos": ConversionEntry(125, "bandeja", "bandejas"),
    "piña": ConversionEntry(1500, "piña", "piñas"),

    # Meat
    "pollo": ConversionEntry(200, "pechuga", "pechugas"),
    "carne molida": ConversionEntry(500, "paquete", "paquetes"),
    "bistec": ConversionEntry(200, "bistec", "bistecs"),
    "chuleta de cerdo": ConversionEntry(200, "chuleta", "chuletas"),
    "lomo de cerdo": ConversionEntry(500, "paquete", "paquetes"),
    "tocino": ConversionEntry(200, "paquete", "paquetes"),
    "jamón": ConversionEntry(200, "paquete", "paquetes"),
    "embutidos": ConversionEntry(200, "paquete", "paquetes"),
    "pavo": ConversionEntry(200, "pechuga", "pechugas"),

    # Fish and seafood
    "salmón": ConversionEntry(200, "filete", "filetes"),
    "atún": ConversionEntry(200, "filete", "filetes"),
    "atún en lata": ConversionEntry(140, "lata", "latas"),
    "camarón": ConversionEntry(500, "paquete", "paquetes"),
    "tilapia": ConversionEntry(200, "filete", "filetes"),
    "bacalao": ConversionEntry(200, "filete", "filetes"),

    # Eggs
    "huevo": ConversionEntry(60, "huevo", "huevos"),
    "clara de huevo": ConversionEntry(30, "clara", "claras"),

    # Dairy
    "yogur": ConversionEntry(125, "envase", "envases", "container", "containers"),
    "yogur griego": ConversionEntry(170, "envase", "envases", "container", "containers"),
    "queso": ConversionEntry(250, "paquete", "paquetes", "package", "packages"),
    "queso fresco": ConversionEntry(400, "paquete", "paquetes", "package", "packages"),
    "queso feta": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),
    "queso parmesano": ConversionEntry(100, "paquete", "paquetes", "package", "packages"),
    "queso mozzarella": ConversionEntry(250, "paquete", "paquetes", "package", "packages"),
    "queso cottage": ConversionEntry(400, "pote", "potes", "container", "containers"),
    "leche": ConversionEntry(1000, "litro", "litros", "gallon", "gallons"),
    "leche de almendra": ConversionEntry(1000, "litro", "litros", "gallon", "gallons"),
    "leche de coco": ConversionEntry(400, "lata", "latas", "can", "cans"),
    "crema": ConversionEntry(200, "envase", "envases", "container", "containers"),
    "mantequilla": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),

    # Aromatics and fresh herbs
    "ajo": ConversionEntry(5, "diente", "dientes"),
    "jengibre": ConversionEntry(50, "trozo", "trozos"),
    "perejil": ConversionEntry(50, "manojo", "manojos"),
    "cilantro": ConversionEntry(50, "manojo", "manojos"),
    "albahaca": ConversionEntry(30, "manojo", "manojos"),
    "cebollín": ConversionEntry(50, "manojo", "manojos"),
    "hierbas frescas": ConversionEntry(30, "manojo", "manojos"),

    # Oils and liquids
    "aceite de oliva": ConversionEntry(500, "botella", "botellas", "bottle", "bottles"),
    "aceite de aguacate": ConversionEntry(500, "botella", "botellas", "bottle", "bottles"),
    "aceite de coco": ConversionEntry(500, "frasco", "frascos", "jar", "jars"),
    "aceite de sésamo": ConversionEntry(250, "botella", "botellas", "bottle", "bottles"),
    "jugo de limón": ConversionEntry(100, "limón", "limones", "lemon", "lemons"),
    "jugo de lima": ConversionEntry(80, "lima", "limas", "lime", "limes"),
    "vinagre": ConversionEntry(500, "botella", "botellas", "bottle", "bottles"),
    "vinagre balsámico": ConversionEntry(250, "botella", "botellas", "bottle", "bottles"),

    # Sauces and condiments
    "salsa de tomate": ConversionEntry(400, "frasco", "frascos", "jar", "jars"),
    "salsa de soya": ConversionEntry(250, "botella", "botellas", "bottle", "bottles"),
    "mostaza": ConversionEntry(200, "frasco", "frascos", "jar", "jars"),
    "mayonesa": ConversionEntry(400, "frasco", "frascos", "jar", "jars"),
    "hummus": ConversionEntry(200, "pote", "potes", "container", "containers"),

    # Nuts and seeds
    "almendras": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),
    "nueces": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),
    "avellanas": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),
    "semillas de chía": ConversionEntry(200, "paquete", "paquetes", "package", "packages"),
    "semillas de sésamo": ConversionEntry(100, "paquete", "paquetes", "package", "packages"),

    # Grains and bread
    "arroz": ConversionEntry(1000, "paquete", "paquetes", "package", "packages"),
    "quinoa": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "avena": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "pasta": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "harina de almendra": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "pan integral": ConversionEntry(500, "pan", "panes", "loaf", "loaves"),
    "tortilla integral": ConversionEntry(300, "paquete", "paquetes", "package", "packages"),
    "pan pita": ConversionEntry(300, "paquete", "paquetes", "package", "packages"),

    # Legumes
    "frijoles": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "lentejas": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),
    "garbanzos": ConversionEntry(500, "paquete", "paquetes", "package", "packages"),

    # Pickles
    "aceitunas": ConversionEntry(200, "frasco", "frascos", "jar", "jars"),
    "pepinillos": ConversionEntry(300, "frasco", "frascos", "jar", "jars"),

    # Pantry
    "caldo": ConversionEntry(1000, "litro", "litros", "quart", "quarts"),
    "proteína en polvo": ConversionEntry(1000, "pote", "potes", "container", "containers"),
    "miel": ConversionEntry(500, "frasco", "frascos", "jar", "jars"),
    "extracto de vainilla": ConversionEntry(100, "frasco", "frascos", "bottle", "bottles"),
    "coco rallado": ConversionEntry(100, "paquete", "paquetes", "package", "packages"),
    "polvo para hornear": ConversionEntry(100, "sobre", "sobres", "package", "packages"),

    # Spices, always sold and listed by weight
    "canela": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "romero": ConversionEntry(20, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "tomillo": ConversionEntry(20, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "orégano": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "eneldo": ConversionEntry(20, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "hierbas italianas": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "condimento para tacos": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "ajo en polvo": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "hojuelas de chile": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
    "pimienta": ConversionEntry(50, "sobre", "sobres", "package", "packages", keep_in_grams=True),
}

# Regional and English aliases -> key in INGREDIENT_CONVERSIONS.
# Aliases whose target is missing from the table are skipped at lookup time.
INGREDIENT_SYNONYMS: dict[str, str] = {
    "patata": "papa",
    "banana": "plátano",
    "palta": "aguacate",
    "jitomate": "tomate",
    "choclo": "maíz",
    "elote": "maíz",
    "calabaza": "calabacín",
    "auyama": "calabaza",
    "egg": "huevo",
    "yogurt": "yogur",
    "beef": "res",
    "chicken": "pollo",
    "turkey": "pavo",
    "shrimp": "camarón",
    "bell pepper": "pimiento",
    "zucchini": "calabacín",
    "eggplant": "berenjena",
    "spinach": "espinaca",
    "lettuce": "lechuga",
    "onion": "cebolla",
    "carrot": "zanahoria",
    "potato": "papa",
    "tomato": "tomate",
    "cucumber": "pepino",
    "broccoli": "brócoli",
    "mushroom": "champiñón",
    "garlic": "ajo",
    "lemon": "limón",
    "lime": "lima",
    "avocado": "aguacate",
    "tuna": "atún",
    "salmon": "salmón",
    "cheese": "queso",
    "milk": "leche",
    "butter": "mantequilla",
    "oil": "aceite",
    "olive oil": "aceite de oliva",
    "pechuga": "pollo",
    "muslo": "pollo",
    "filete": "pollo",
    "calabacitas": "calabacín",
    "zanahorias": "zanahoria",
    "pimientos": "pimiento",
    "calabacines": "calabacín",
}

# Names containing any of these are sold in containers rather than by weight
LIQUID_KEYWORDS: tuple[str, ...] = (
    "leche", "milk",
    "aceite", "oil",
    "vinagre", "vinegar",
    "jugo", "juice",
    "salsa", "sauce",
    "crema", "cream",
    "caldo", "broth",
    "agua", "water",
    "vino", "wine",
    "cerveza", "beer",
    "yogur", "yogurt",
    "nata",
)

# Name fragments that suggest a countable item when no table entry matches
COUNTABLE_HINTS: tuple[str, ...] = (
    "filete",
    "trozo",
    "rebanada",
    "rodaja",
    "diente",
    "rama",
    "hoja",
)


@dataclass(frozen=True)
class ReferenceData:
    """Read-only bundle of the tables the matcher and converter consult."""

    conversions: Mapping[str, ConversionEntry]
    synonyms: Mapping[str, str] = field(default_factory=dict)
    liquid_keywords: tuple[str, ...] = LIQUID_KEYWORDS
    countable_hints: tuple[str, ...] = COUNTABLE_HINTS

    def __post_init__(self) -> None:
        object.__setattr__(self, "conversions", MappingProxyType(dict(self.conversions)))
        object.__setattr__(self, "synonyms", MappingProxyType(dict(self.synonyms)))

    def is_liquid(self, name: str) -> bool:
        """Check whether an ingredient name has a liquid keyword as a whole word."""
        words = set(WORD_PATTERN.findall(name.lower()))
        return any(keyword in words for keyword in self.liquid_keywords)


DEFAULT_REFERENCE = ReferenceData(
    conversions=INGREDIENT_CONVERSIONS,
    synonyms=INGREDIENT_SYNONYMS,
)
