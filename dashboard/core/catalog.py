# dashboard/core/catalog.py
"""
Catalog of the dashboard screens.

Every protected surface is a `Component`; its value is the exact Arabic
label shown to users and used as the key in the access tables. Sections
group sub-sections, and each sub-section owns one or more ledgers (REST
collections under /api/<slug>).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Component(str, Enum):
    # البلينا
    BALLINA = "البلينا للتجارة والحسابات"
    BALLINA_WORKERS = "حساب عمال البلينا"
    BALLINA_SHOWROOM = "البلينا معرض الجمهورية الدولي"
    BALLINA_TRADERS = "حسابات تجار البلينا"
    BALLINA_SALES = "مبيعات البلينا معرض الجمهورية"

    # جرجا
    GIRGA = "جرجا للتجارة والحسابات"
    GIRGA_TRADERS = "حساب تجار جرجا معرض مول العرب"
    GIRGA_WORKERS = "حسابات عمال جرجا معرض مول العرب"
    GIRGA_MALL = "جرجا معرض مول العرب"
    GIRGA_SALES = "مبيعات جرجا مول العرب"

    # سنتر دلع الهوانم
    DALAA = "سنتر دلع الهوانم للحسابات"
    DALAA_WORKERS = "حسابات عمال سنتر دلع الهوانم"
    DALAA_TRADERS = "حسابات تجار سنتر دلع الهوانم"
    DALAA_CENTER = "سنتر دلع الهوانم"
    DALAA_SALES = "مبيعات سنتر دلع الهوانم"

    # سنتر سيما
    SIMA = "سنتر سيما للحسابات"
    SIMA_CENTER = "سنتر سيما"
    SIMA_WORKERS = "حسابات عمال سنتر سيما"
    SIMA_SALES = "مبيعات سنتر سيما"
    SIMA_TRADERS = "حساب تجار سنتر سيما"

    # سنتر غزة
    GAZA = "سنتر غزة للحسابات"
    GAZA_SALES = "مبيعات سنتر غزة"
    GAZA_CENTER = "سنتر غزة"
    GAZA_TRADERS = "حساب تجار سنتر غزة"
    GAZA_WORKERS = "حسابات عمال سنتر غزة"

    @classmethod
    def lookup(cls, name: str) -> Optional["Component"]:
        """Exact-match lookup by label; no trimming or normalization."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Ledger:
    slug: str
    title: str

    @property
    def endpoint(self) -> str:
        return f"/api/{self.slug}"


@dataclass(frozen=True)
class SubSection:
    id: str
    component: Component
    ledgers: Tuple[Ledger, ...]


@dataclass(frozen=True)
class Section:
    id: str
    component: Component
    subsections: Tuple[SubSection, ...]

    @property
    def title(self) -> str:
        return self.component.value


def _single(sub_id: str, component: Component, slug: str) -> SubSection:
    return SubSection(sub_id, component, (Ledger(slug, component.value),))


SECTIONS: Tuple[Section, ...] = (
    Section("ballina", Component.BALLINA, (
        _single("ballina-workers", Component.BALLINA_WORKERS, "worker-account"),
        SubSection("ballina-showroom", Component.BALLINA_SHOWROOM, (
            Ledger("bike-storage-account", "حسابات بايكه ومخازن البلينا"),
        )),
        _single("ballina-traders", Component.BALLINA_TRADERS, "merchant-account"),
        _single("ballina-sales", Component.BALLINA_SALES, "exhibition-sales"),
    )),
    Section("girga", Component.GIRGA, (
        _single("girga-traders", Component.GIRGA_TRADERS, "merchant-garga-account"),
        _single("girga-workers", Component.GIRGA_WORKERS, "worker-garga-account"),
        SubSection("girga-mall", Component.GIRGA_MALL, (
            Ledger("garga-storage", "حسابات بايكه ومخازن جرجا"),
            Ledger("mahmoud-garga-account", "حسابات محمود موهوب جرجا"),
            Ledger("waheed-garga-account", "حسابات وحيد سعيد جرجا"),
        )),
        _single("girga-sales", Component.GIRGA_SALES, "exhibition-garga-sales"),
    )),
    Section("dalaa-hawanem", Component.DALAA, (
        _single("dalaa-workers", Component.DALAA_WORKERS, "center-delaa-hawanem-worker"),
        _single("dalaa-traders", Component.DALAA_TRADERS, "center-delaa-hawanem-merchant"),
        SubSection("dalaa-center", Component.DALAA_CENTER, (
            Ledger("center-delaa-hawanem-account", "حسابات رئيسية"),
            Ledger("mahmoud-center-delaa-hawanem-account", "محمود موهوب"),
            Ledger("basem-center-delaa-hawanem-account", "باسم سعيد"),
            Ledger("waheed-center-delaa-hawanem-account", "وحيد سعيد"),
            Ledger("emad-center-delaa-hawanem-account", "عماد ناصر"),
        )),
        _single("dalaa-sales", Component.DALAA_SALES, "center-delaa-hawanem-sales"),
    )),
    Section("sima", Component.SIMA, (
        _single("sima-center", Component.SIMA_CENTER, "center-seima-account"),
        _single("sima-workers", Component.SIMA_WORKERS, "worker-center-seima-account"),
        _single("sima-sales", Component.SIMA_SALES, "center-seima-sales"),
        _single("sima-traders", Component.SIMA_TRADERS, "center-seima-merchant"),
    )),
    Section("gaza", Component.GAZA, (
        _single("gaza-sales", Component.GAZA_SALES, "new-center-gaza-sales"),
        SubSection("gaza-center", Component.GAZA_CENTER, (
            Ledger("center-gaza-account", "حسابات سنتر غزة"),
            Ledger("mahmoud-center-gaza-account", "حسابات محمود موهوب سنتر غزة"),
            Ledger("waheed-center-gaza-account", "حسابات وحيد سعيد سنتر غزة"),
            Ledger("basem-waheed-center-gaza-account", "حسابات باسم سعيد عند وحيد سنتر غزة"),
            Ledger("mina-waheed-center-gaza-account", "حسابات مينا ناصر عند وحيد سنتر غزة"),
            Ledger("bike-storage-center-gaza-account", "حسابات بايكة ومخزن سنتر غزة"),
        )),
        # The traders screen has always read from the center sales collection.
        _single("gaza-traders", Component.GAZA_TRADERS, "center-gaza-sales"),
        _single("gaza-workers", Component.GAZA_WORKERS, "worker-center-gaza-account"),
    )),
)


def iter_subsections() -> Iterator[Tuple[Section, SubSection]]:
    for section in SECTIONS:
        for sub in section.subsections:
            yield section, sub


def iter_ledgers() -> Iterator[Tuple[Section, SubSection, Ledger]]:
    for section, sub in iter_subsections():
        for ledger in sub.ledgers:
            yield section, sub, ledger


def find_ledger(slug: str) -> Optional[Tuple[Section, SubSection, Ledger]]:
    for entry in iter_ledgers():
        if entry[2].slug == slug:
            return entry
    return None
