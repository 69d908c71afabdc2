from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class EquipmentSynonym:
    term: str
    synonyms: tuple[str, ...]

    @property
    def search_pattern(self) -> str:
        parts = [f"'{synonym}'" if " " in synonym else synonym for synonym in self.synonyms]
        return f"({' OR '.join(parts)})"

    def matches(self, value: str) -> bool:
        needle = value.strip().lower()
        return self.term.lower() == needle or any(synonym.lower() == needle for synonym in self.synonyms)


EQUIPMENT_SYNONYMS: tuple[EquipmentSynonym, ...] = (
    EquipmentSynonym(
        "læder", ("læder", "leather", "læderindtræk", "læder interiør", "læder sæder", "skindinteriør")
    ),
    EquipmentSynonym(
        "sportssæder", ("sportssæder", "sportsæder", "sport seats", "sport sæder", "S-line sæder", "sportsstole")
    ),
    EquipmentSynonym(
        "panoramatag", ("panoramatag", "panorama tag", "soltag", "glasstag", "panoramic roof", "sunroof")
    ),
    EquipmentSynonym(
        "navigation", ("navigation", "navi", "GPS", "navigationssystem", "infotainment", "MMI", "iDrive")
    ),
    EquipmentSynonym(
        "klimaanlæg", ("klimaanlæg", "aircon", "aircondition", "klima", "automatisk klima", "2-zone klima")
    ),
    EquipmentSynonym("xenon", ("xenon", "xenon lys", "HID", "bi-xenon", "LED forlygter", "adaptive lys")),
    EquipmentSynonym("fartpilot", ("fartpilot", "cruise control", "adaptive cruise", "ACC", "speed pilot")),
    EquipmentSynonym(
        "parkeringssensor",
        ("parkeringssensor", "PDC", "parking sensor", "parkeringshjælp", "bagparkeringssensor"),
    ),
    EquipmentSynonym("bakspejl", ("bakspejl", "bakkamera", "rear camera", "parkeringskamera", "360 kamera")),
    EquipmentSynonym("bluetooth", ("bluetooth", "hands-free", "telefon", "streaming", "wireless")),
    EquipmentSynonym("metallic", ("metallic", "metallic lak", "perlelak", "special lak", "metallic maling")),
    EquipmentSynonym("fælge", ("fælge", "alufælge", "alloy wheels", "sportsfælge", "lette fælge")),
)

EQUIPMENT_OPTIONS: tuple[tuple[str, str], ...] = (
    # Climate & comfort
    ("2_zone_klima", "2 zone klima"),
    ("3_zone_klima", "3 zone klima"),
    ("automatisk_klima", "Automatisk klima"),
    ("klimaanlaeg", "Klimaanlæg"),
    ("saedevarme", "Sædevarme"),
    ("saedekøling", "Sædekøling"),
    ("ventilerede_saeder", "Ventilerede sæder"),
    ("massage_saeder", "Massage sæder"),
    ("el_saeder", "El-sæder"),
    ("memory_saeder", "Memory sæder"),
    ("laeder", "Læder"),
    ("alcantara", "Alcantara"),
    ("sport_saeder", "Sport sæder"),
    # Technology & infotainment
    ("navigation", "Navigation"),
    ("gps", "GPS"),
    ("bluetooth", "Bluetooth"),
    ("android_auto", "Android Auto"),
    ("apple_carplay", "Apple CarPlay"),
    ("wifi", "WiFi"),
    ("usb", "USB"),
    ("aux", "AUX"),
    ("cd_afspiller", "CD afspiller"),
    ("dab_radio", "DAB radio"),
    ("harman_kardon", "Harman Kardon"),
    ("bose", "Bose"),
    ("bang_olufsen", "Bang & Olufsen"),
    ("premium_lyd", "Premium lyd"),
    # Safety & driver assistance
    ("abs", "ABS"),
    ("esp", "ESP"),
    ("airbags", "Airbags"),
    ("side_airbags", "Side airbags"),
    ("gardin_airbags", "Gardin airbags"),
    ("adaptiv_fartpilot", "Adaptiv fartpilot"),
    ("fartpilot", "Fartpilot"),
    ("lane_assist", "Lane assist"),
    ("blind_spot", "Blind spot"),
    ("collision_warning", "Collision warning"),
    ("emergency_brake", "Emergency brake"),
    ("traffic_sign_recognition", "Traffic sign recognition"),
    ("driver_attention", "Driver attention"),
    ("night_vision", "Night vision"),
    # Cameras & parking
    ("360_kamera", "360° kamera"),
    ("bakkamera", "Bakkamera"),
    ("frontkamera", "Frontkamera"),
    ("sidekamera", "Sidekamera"),
    ("parkeringssensorer", "Parkeringssensorer"),
    ("park_assist", "Park assist"),
    ("automatisk_parkering", "Automatisk parkering"),
    # Lighting
    ("xenon", "Xenon"),
    ("led_forlygter", "LED forlygter"),
    ("led_baglygter", "LED baglygter"),
    ("matrix_led", "Matrix LED"),
    ("adaptive_lys", "Adaptive lys"),
    ("automatiske_lygter", "Automatiske lygter"),
    ("tågelygter", "Tågelygter"),
    ("dagslys", "Dagslys"),
    # Exterior
    ("panoramatag", "Panoramatag"),
    ("soltag", "Soltag"),
    ("el_soltag", "El-soltag"),
    ("tagbøjler", "Tagbøjler"),
    ("tagbox", "Tagbox"),
    ("anhængertræk", "Anhængertræk"),
    ("el_anhængertræk", "El-anhængertræk"),
    ("metallic_lak", "Metallic lak"),
    ("perlelak", "Perlelak"),
    # Wheels & suspension
    ("alufælge", "Alufælge"),
    ("sport_undervogn", "Sport undervogn"),
    ("luftundervogn", "Luftundervogn"),
    ("adaptiv_undervogn", "Adaptiv undervogn"),
    ("sport_styring", "Sport styring"),
    # Engine & performance
    ("turbo", "Turbo"),
    ("kompressor", "Kompressor"),
    ("sport_mode", "Sport mode"),
    ("eco_mode", "Eco mode"),
    ("start_stop", "Start/stop"),
    # Transmission & drive
    ("automatgear", "Automatgear"),
    ("tiptronic", "Tiptronic"),
    ("dsg", "DSG"),
    ("cvt", "CVT"),
    ("firehjulstræk", "Firehjulstræk"),
    ("quattro", "Quattro"),
    ("xdrive", "xDrive"),
    ("4matic", "4MATIC"),
    # Convenience
    ("keyless_go", "Keyless Go"),
    ("keyless_entry", "Keyless Entry"),
    ("el_bagklap", "El-bagklap"),
    ("el_vinduer", "El-vinduer"),
    ("el_spejle", "El-spejle"),
    ("foldbare_spejle", "Foldbare spejle"),
    ("opvarmede_spejle", "Opvarmede spejle"),
    ("regnsensor", "Regnsensor"),
    ("lyssensor", "Lyssensor"),
    # Interior
    ("multifunktionsrat", "Multifunktionsrat"),
    ("el_rat", "El-rat"),
    ("opvarmet_rat", "Opvarmet rat"),
    ("læder_rat", "Læder rat"),
    ("sport_rat", "Sport rat"),
    ("head_up_display", "Head-up display"),
    ("digital_cockpit", "Digital cockpit"),
    ("instrumentpanel", "Instrumentpanel"),
    # Storage & practicality
    ("krog_bagagerum", "Krog bagagerum"),
    ("net_bagagerum", "Net bagagerum"),
    ("skileje", "Skileje"),
    ("opbevaringspakke", "Opbevaringspakke"),
    ("bagagerumsafdækning", "Bagagerumsafdækning"),
    # Powertrain extras
    ("hybrid", "Hybrid"),
    ("plugin_hybrid", "Plugin hybrid"),
    ("el_bil", "El-bil"),
    ("mild_hybrid", "Mild hybrid"),
    ("adblue", "AdBlue"),
    ("dpf_filter", "DPF filter"),
)

_EQUIPMENT_LABELS = dict(EQUIPMENT_OPTIONS)


def equipment_label(value: str) -> str:
    return _EQUIPMENT_LABELS.get(value, value)


def _find_synonym(term: str) -> EquipmentSynonym | None:
    for entry in EQUIPMENT_SYNONYMS:
        if entry.matches(term):
            return entry
    return None


def get_equipment_synonyms(term: str) -> list[str]:
    entry = _find_synonym(term)
    return list(entry.synonyms) if entry is not None else [term]


def expand_equipment_terms(equipment: Iterable[str] | None) -> str:
    if not equipment:
        return ""

    expanded: list[str] = []
    for term in equipment:
        entry = _find_synonym(term)
        expanded.append(entry.search_pattern if entry is not None else f'"{term}"')
    return " AND ".join(expanded)
