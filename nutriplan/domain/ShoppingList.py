"""ShoppingList aggregate: rendered pack-format items keyed by ingredient name."""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional


class ShoppingItem:
    def __init__(self, name: str, quantity: float, unit: str, text: str,
                 pack_count: Optional[int] = None, pack_size: Optional[float] = None,
                 category: str = "other"):
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.text = text
        self.pack_count = pack_count
        self.pack_size = pack_size
        self.category = category

    @property
    def purchased_quantity(self) -> float:
        '''Amount actually bought; equals the raw quantity when no pack size is known.'''
        if self.pack_count is None:
            return self.quantity
        return self.pack_count * self.pack_size

    def __str__(self) -> str:
        return self.text

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "text": self.text,
            "pack_count": self.pack_count,
            "pack_size": self.pack_size,
            "purchased_quantity": self.purchased_quantity,
            "category": self.category,
        }


class ShoppingList:
    def __init__(self, items: Iterable[ShoppingItem] = (), categories: Iterable[str] = ()):
        ordered = sorted(items, key=lambda i: i.name.casefold())
        self.items: "OrderedDict[str, ShoppingItem]" = OrderedDict((i.name, i) for i in ordered)
        self.categories = tuple(categories)

    def get_items(self) -> List[ShoppingItem]:
        return list(self.items.values())

    def __getitem__(self, name: str) -> ShoppingItem:
        return self.items[name]

    def __contains__(self, name) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items.values())

    def as_text(self) -> Dict[str, str]:
        '''Ordered mapping ingredient name -> rendered pack-format string.'''
        return OrderedDict((name, item.text) for name, item in self.items.items())

    def grouped(self) -> Dict[str, List[ShoppingItem]]:
        '''Items per category, in taxonomy order; empty categories are kept.'''
        groups: Dict[str, List[ShoppingItem]] = OrderedDict((c, []) for c in self.categories)
        for item in self.items.values():
            groups.setdefault(item.category, []).append(item)
        return groups

    def __str__(self) -> str:
        items_str = ",\n\t".join(item.text for item in self.items.values())
        return f"Shopping List:\n\t{items_str}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "items": [item.to_dict() for item in self.items.values()],
            "text": dict(self.as_text()),
            "count": len(self.items),
        }
