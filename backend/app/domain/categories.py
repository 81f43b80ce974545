# app/domain/categories.py
from enum import Enum
from typing import Dict, List


class Category(str, Enum):
    BEACH = "Beach"
    WINDMILLS = "Windmills"
    MODERN = "Modern"
    COUNTRYSIDE = "Countryside"
    POOLS = "Pools"
    ISLANDS = "Islands"
    LAKE = "Lake"
    SKIING = "Skiing"
    CASTLES = "Castles"
    CAVES = "Caves"
    CAMPING = "Camping"
    ARCTIC = "Arctic"
    DESERT = "Desert"
    BARNS = "Barns"
    LUX = "Lux"


DESCRIPTIONS: Dict[Category, str] = {
    Category.BEACH: "This property is close to the beach!",
    Category.WINDMILLS: "This property has windmills!",
    Category.MODERN: "This property is modern!",
    Category.COUNTRYSIDE: "This property is in the countryside!",
    Category.POOLS: "This property has a beautiful pool!",
    Category.ISLANDS: "This property is on an island!",
    Category.LAKE: "This property is near a lake!",
    Category.SKIING: "This property has skiing activities!",
    Category.CASTLES: "This property is an ancient castle!",
    Category.CAVES: "This property is in a spooky cave!",
    Category.CAMPING: "This property offers camping activities!",
    Category.ARCTIC: "This property is in arctic environment!",
    Category.DESERT: "This property is in the desert!",
    Category.BARNS: "This property is in a barn!",
    Category.LUX: "This property is brand new and luxurious!",
}


def all_categories() -> List[Dict[str, str]]:
    return [{"label": c.value, "description": DESCRIPTIONS[c]} for c in Category]
