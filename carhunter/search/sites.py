from typing import Iterable


GROUP_PREFIX = "group:"

SITE_GROUPS: dict[str, tuple[str, ...]] = {
    "DK": (
        "bilbasen.dk",
        "dba.dk",
        "biltorvet.dk",
        "autotorvet.dk",
        "autobasen.dk",
        "bilhandel.dk",
        "bilsalg.autocom.dk",
    ),
    "EU": (
        "mobile.de",
        "autoscout24.com",
        "heycar.de",
    ),
}

ALL_SITES: tuple[str, ...] = tuple(site for group in SITE_GROUPS.values() for site in group)

GROUP_LABELS = {
    "DK": "Danske sites (alle)",
    "EU": "Europæiske sites (alle)",
}

SITE_LABELS = {
    "bilbasen.dk": "Bilbasen.dk",
    "dba.dk": "DBA.dk",
    "biltorvet.dk": "Biltorvet.dk",
    "autotorvet.dk": "Autotorvet.dk",
    "autobasen.dk": "Autobasen.dk",
    "bilhandel.dk": "Bilhandel.dk",
    "bilsalg.autocom.dk": "Bilsalg.autocom.dk",
    "mobile.de": "Mobile.de",
    "autoscout24.com": "AutoScout24.com",
    "heycar.de": "HeyCar.de",
}


def _build_site_options() -> list[dict[str, object]]:
    options: list[dict[str, object]] = [
        {"value": f"{GROUP_PREFIX}{group}", "label": label, "isGroup": True} for group, label in GROUP_LABELS.items()
    ]
    for group, sites in SITE_GROUPS.items():
        for site in sites:
            options.append({"value": site, "label": SITE_LABELS.get(site, site), "group": group})
    return options


SITE_OPTIONS = _build_site_options()


def is_known_site(value: str) -> bool:
    if value.startswith(GROUP_PREFIX):
        return value[len(GROUP_PREFIX) :] in SITE_GROUPS
    return value in ALL_SITES


def expand_site_selection(selected_sites: Iterable[str]) -> list[str]:
    expanded: dict[str, None] = {}

    for site in selected_sites:
        if site.startswith(GROUP_PREFIX):
            for member in SITE_GROUPS.get(site[len(GROUP_PREFIX) :], ()):
                expanded.setdefault(member, None)
        else:
            expanded.setdefault(site, None)

    return list(expanded)
