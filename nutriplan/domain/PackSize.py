"""PackSize domain entity: standard retail packaging of one ingredient."""
from numbers import Real
from typing import Iterable

from nutriplan.domain.errors import CatalogError


class PackSize:
    def __init__(self, name: str, standard_pack: float, unit: str, retail_name: str,
                 plural_form: str, product: str = "", discrete: bool = False,
                 aliases: Iterable[str] = ()):
        self.name = name
        self.standard_pack = standard_pack
        self.unit = unit
        self.retail_name = retail_name
        self.plural_form = plural_form
        self.product = product
        self.discrete = discrete
        self.aliases = tuple(aliases)

    def form_for(self, count: int) -> str:
        '''Singular retail name for exactly one pack, plural form otherwise.'''
        return self.retail_name if count == 1 else self.plural_form

    def __str__(self) -> str:
        return f"{self.name} - {self.standard_pack:g}{self.unit} {self.retail_name}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise CatalogError(f"Pack size entry must be an object, got {data!r}")
        name = (data.get("name") or "").strip().lower()
        if not name:
            raise CatalogError(f"Pack size without a name: {data!r}")
        pack = data.get("standard_pack")
        if isinstance(pack, bool) or not isinstance(pack, Real) or pack <= 0:
            raise CatalogError(f"Pack size '{name}' has invalid standard_pack {pack!r}")
        for key in ("unit", "retail_name"):
            if not (data.get(key) or "").strip():
                raise CatalogError(f"Pack size '{name}' is missing '{key}'")
        retail = data["retail_name"].strip()
        return PackSize(
            name=name,
            standard_pack=pack,
            unit=data["unit"].strip(),
            retail_name=retail,
            plural_form=(data.get("plural_form") or retail).strip(),
            product=(data.get("product") or "").strip(),
            discrete=bool(data.get("discrete", False)),
            aliases=[a.strip().lower() for a in data.get("aliases", []) if a and a.strip()],
        )

    def to_dict(self):
        return {
            "name": self.name,
            "standard_pack": self.standard_pack,
            "unit": self.unit,
            "retail_name": self.retail_name,
            "plural_form": self.plural_form,
            "product": self.product,
            "discrete": self.discrete,
            "aliases": list(self.aliases),
        }
