"""
Shared constants used across multiple modules.
Single source of truth for body regions, the predefined symptom catalog
and severity labels.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional

# Spellings produced by the body map that put the vertical position first.
# Stored form is side first: "leftupperarm", "rightlowerleg", ...
REGION_NAME_ALIASES: Mapping[str, str] = MappingProxyType({
    "upperleftarm":  "leftupperarm",
    "upperrightarm": "rightupperarm",
    "lowerleftarm":  "leftlowerarm",
    "lowerrightarm": "rightlowerarm",
    "upperleftleg":  "leftupperleg",
    "upperrightleg": "rightupperleg",
    "lowerleftleg":  "leftlowerleg",
    "lowerrightleg": "rightlowerleg",
})

# Body-map region ids (front and back views)
STANDARD_REGIONS = frozenset({
    "head", "neck", "chest", "abdomen", "pelvic",
    "upperLeftArm", "lowerLeftArm", "upperRightArm", "lowerRightArm",
    "upperLeftLeg", "lowerLeftLeg", "upperRightLeg", "lowerRightLeg",
    "upperBack", "middleBack", "lowerBack", "leftArmBack", "rightArmBack",
    "upperLeftArmBack", "lowerLeftArmBack", "upperRightArmBack", "lowerRightArmBack",
    "upperLeftLegBack", "lowerLeftLegBack", "upperRightLegBack", "lowerRightLegBack",
})

SYMPTOM_CATEGORIES = (
    "physical", "mental", "digestive", "respiratory",
    "musculoskeletal", "neurological", "skin", "other",
)

SEVERITY_LABELS: Mapping[int, str] = MappingProxyType({
    1: "Mild",
    2: "Moderate",
    3: "Uncomfortable",
    4: "Severe",
    5: "Extreme",
})

# (substring of lower-cased input, canonical catalog name); first match wins
SYMPTOM_NAME_VARIANTS = (
    ("left arm muscle", "Upper Left Arm Muscle Pain"),
    ("right arm muscle", "Upper Right Arm Muscle Pain"),
    ("left shoulder", "Shoulder Pain Left"),
    ("right shoulder", "Shoulder Pain Right"),
    ("left calf", "Calf Pain Left"),
    ("right calf", "Calf Pain Right"),
)


class SymptomDefinition(NamedTuple):
    name: str
    region_id: str
    category: str


# (name, region id, category)
_RAW_SYMPTOMS = (
    # Head region
    ("Headache", "head", "neurological"),
    ("Migraine", "head", "neurological"),
    ("Sinus Pain", "head", "neurological"),
    ("Vertigo", "head", "neurological"),
    ("Dizziness", "head", "neurological"),
    ("Eye Pain", "head", "physical"),
    ("Anxiety", "head", "mental"),
    ("Stress", "head", "mental"),
    ("Depression", "head", "mental"),
    ("Mental Fatigue", "head", "mental"),
    ("Cognitive Fog", "head", "mental"),

    # Neck region
    ("Neck Pain", "neck", "musculoskeletal"),
    ("Stiff Neck", "neck", "musculoskeletal"),
    ("Shoulder Pain", "neck", "musculoskeletal"),
    ("Cervical Pain", "neck", "musculoskeletal"),

    # Chest region
    ("Chest Pain", "chest", "respiratory"),
    ("Chest Tightness", "chest", "respiratory"),
    ("Breathing Difficulty", "chest", "respiratory"),
    ("Shortness of Breath", "chest", "respiratory"),
    ("Cough", "chest", "respiratory"),
    ("Upper Chest Tightness", "chest", "respiratory"),
    ("Lower Chest Pain", "chest", "respiratory"),
    ("Bronchial Discomfort", "chest", "respiratory"),
    ("Diaphragm Tension", "chest", "respiratory"),

    # Abdomen region
    ("Abdominal Pain", "abdomen", "digestive"),
    ("Stomach Pain", "abdomen", "digestive"),
    ("Bloating", "abdomen", "digestive"),
    ("Nausea", "abdomen", "digestive"),
    ("Vomiting", "abdomen", "digestive"),
    ("Loose Stool", "abdomen", "digestive"),
    ("Hard Stool", "abdomen", "digestive"),
    ("Digestive Discomfort", "abdomen", "digestive"),
    ("Upper Abdominal Cramps", "abdomen", "digestive"),
    ("Lower Abdominal Pain", "abdomen", "digestive"),
    ("Indigestion", "abdomen", "digestive"),
    ("Stomach Ache", "abdomen", "digestive"),

    # Pelvic region
    ("Pelvic Pain", "pelvic", "physical"),
    ("Groin Discomfort", "pelvic", "physical"),
    ("Menstrual Cramps", "pelvic", "physical"),
    ("Hip Discomfort", "pelvic", "physical"),

    # Back regions
    ("Upper Back Pain", "upperBack", "musculoskeletal"),
    ("Middle Back Pain", "middleBack", "musculoskeletal"),
    ("Lower Back Pain", "lowerBack", "musculoskeletal"),
    ("Back Stiffness", "upperBack", "musculoskeletal"),
    ("Sciatica", "lowerBack", "musculoskeletal"),
    ("Buttock Pain", "buttocks", "musculoskeletal"),
    ("Back Pain", "upperBack", "musculoskeletal"),
    ("Upper Back Strain", "upperBack", "musculoskeletal"),
    ("Shoulder Blade Pain", "upperBack", "musculoskeletal"),
    ("Trapezius Pain", "upperBack", "musculoskeletal"),

    # Left Arm regions - Front
    ("Upper Left Arm Muscle Pain", "upperLeftArm", "musculoskeletal"),
    ("Left Bicep Pain", "upperLeftArm", "musculoskeletal"),
    ("Left Tricep Pain", "upperLeftArm", "musculoskeletal"),
    ("Shoulder Pain Left", "upperLeftArm", "musculoskeletal"),
    ("Shoulder Tension Left", "upperLeftArm", "musculoskeletal"),
    ("Upper Left Arm Pain", "upperLeftArm", "musculoskeletal"),
    ("Left Forearm Pain", "lowerLeftArm", "musculoskeletal"),
    ("Left Wrist Pain", "lowerLeftArm", "musculoskeletal"),
    ("Lower Left Arm Pain", "lowerLeftArm", "musculoskeletal"),
    ("Left Arm Elbow Pain", "lowerLeftArm", "musculoskeletal"),
    ("Wrist Strain", "lowerLeftArm", "musculoskeletal"),
    ("Bicep Pain Left", "upperLeftArm", "musculoskeletal"),

    # Right Arm regions - Front
    ("Upper Right Arm Muscle Pain", "upperRightArm", "musculoskeletal"),
    ("Right Bicep Pain", "upperRightArm", "musculoskeletal"),
    ("Right Tricep Pain", "upperRightArm", "musculoskeletal"),
    ("Shoulder Pain Right", "upperRightArm", "musculoskeletal"),
    ("Shoulder Tension Right", "upperRightArm", "musculoskeletal"),
    ("Upper Right Arm Pain", "upperRightArm", "musculoskeletal"),
    ("Right Forearm Pain", "lowerRightArm", "musculoskeletal"),
    ("Right Wrist Pain", "lowerRightArm", "musculoskeletal"),
    ("Lower Right Arm Pain", "lowerRightArm", "musculoskeletal"),
    ("Right Arm Elbow Pain", "lowerRightArm", "musculoskeletal"),
    ("Right Shoulder Pain", "upperRightArm", "musculoskeletal"),
    ("Forearm Pain", "lowerRightArm", "musculoskeletal"),
    ("Elbow Strain", "lowerRightArm", "musculoskeletal"),
    ("Shoulder Strain", "upperRightArm", "musculoskeletal"),
    ("Bicep Pain", "upperRightArm", "musculoskeletal"),
    ("Tricep Pain", "upperRightArm", "musculoskeletal"),
    ("Bicep Pain Right", "upperRightArm", "musculoskeletal"),

    # Left Leg regions - Front
    ("Upper Left Leg Pain", "upperLeftLeg", "musculoskeletal"),
    ("Left Thigh Pain", "upperLeftLeg", "musculoskeletal"),
    ("Left Calf Pain", "lowerLeftLeg", "musculoskeletal"),
    ("Left Ankle Pain", "lowerLeftLeg", "musculoskeletal"),
    ("Calf Pain Left", "lowerLeftLeg", "musculoskeletal"),
    ("Lower Left Leg Pain", "lowerLeftLeg", "musculoskeletal"),
    ("Ankle Pain Left", "lowerLeftLeg", "musculoskeletal"),
    ("Left Knee Pain", "upperLeftLeg", "musculoskeletal"),
    ("Left Leg Cramps", "lowerLeftLeg", "musculoskeletal"),
    ("Hamstring Pain Left", "upperLeftLeg", "musculoskeletal"),

    # Right Leg regions - Front
    ("Upper Right Leg Pain", "upperRightLeg", "musculoskeletal"),
    ("Right Thigh Pain", "upperRightLeg", "musculoskeletal"),
    ("Right Calf Pain", "lowerRightLeg", "musculoskeletal"),
    ("Right Ankle Pain", "lowerRightLeg", "musculoskeletal"),
    ("Calf Pain Right", "lowerRightLeg", "musculoskeletal"),
    ("Lower Right Leg Pain", "lowerRightLeg", "musculoskeletal"),
    ("Ankle Pain Right", "lowerRightLeg", "musculoskeletal"),
    ("Right Knee Pain", "upperRightLeg", "musculoskeletal"),
    ("Right Leg Cramps", "lowerRightLeg", "musculoskeletal"),
    ("Shin Splints", "lowerRightLeg", "musculoskeletal"),
    ("Thigh Pain", "upperRightLeg", "musculoskeletal"),
    ("Quadriceps Pain", "upperRightLeg", "musculoskeletal"),
    ("Hamstring Pain Right", "upperRightLeg", "musculoskeletal"),
    ("Calf Muscle Strain", "lowerRightLeg", "musculoskeletal"),

    # General Leg symptoms
    ("Leg Pain", "upperRightLeg", "musculoskeletal"),
    ("Knee Pain", "upperRightLeg", "musculoskeletal"),

    # Left Arm regions - Back
    ("Left Arm Back Pain", "leftArmBack", "musculoskeletal"),
    ("Upper Left Arm Back Pain", "upperLeftArmBack", "musculoskeletal"),
    ("Lower Left Arm Back Pain", "lowerLeftArmBack", "musculoskeletal"),
    ("Left Triceps Pain", "upperLeftArmBack", "musculoskeletal"),

    # Right Arm regions - Back
    ("Right Arm Back Pain", "rightArmBack", "musculoskeletal"),
    ("Upper Right Arm Back Pain", "upperRightArmBack", "musculoskeletal"),
    ("Lower Right Arm Back Pain", "lowerRightArmBack", "musculoskeletal"),
    ("Right Triceps Pain", "upperRightArmBack", "musculoskeletal"),

    # Left Leg regions - Back
    ("Upper Left Leg Back Pain", "upperLeftLegBack", "musculoskeletal"),
    ("Lower Left Leg Back Pain", "lowerLeftLegBack", "musculoskeletal"),
    ("Hamstring Tension Left", "upperLeftLegBack", "musculoskeletal"),

    # Right Leg regions - Back
    ("Upper Right Leg Back Pain", "upperRightLegBack", "musculoskeletal"),
    ("Lower Right Leg Back Pain", "lowerRightLegBack", "musculoskeletal"),
    ("Hamstring Tension Right", "upperRightLegBack", "musculoskeletal"),

    # General symptoms
    ("Fatigue", "torso", "other"),
    ("Muscle Soreness", "torso", "musculoskeletal"),
    ("Joint Pain", "torso", "musculoskeletal"),
    ("Muscle Strain", "torso", "musculoskeletal"),

    # Common areas of strain
    ("Shoulder Blade Tension", "upperBack", "musculoskeletal"),
    ("Elbow Pain", "lowerRightArm", "musculoskeletal"),
    ("Wrist Pain", "lowerRightArm", "musculoskeletal"),
    ("Forearm Strain", "lowerLeftArmBack", "musculoskeletal"),
    ("Arm Pain", "upperRightArm", "musculoskeletal"),

    # Skin conditions
    ("Skin Rash", "skin", "skin"),
    ("Insect Bite", "skin", "skin"),

    # Other
    ("Other", "torso", "other"),
)


def _dedupe(raw) -> tuple:
    seen = set()
    unique: List[SymptomDefinition] = []
    for name, region_id, category in raw:
        if name in seen:
            continue
        seen.add(name)
        unique.append(SymptomDefinition(name, region_id, category))
    return tuple(unique)


SYMPTOM_CATALOG = _dedupe(_RAW_SYMPTOMS)

_SYMPTOM_TO_REGION: Mapping[str, str] = MappingProxyType(
    {s.name: s.region_id for s in SYMPTOM_CATALOG}
)


# ─── Lookups ───────────────────────────────────────────────────


def standardize_region_name(region: str) -> str:
    """Normalise a body-map region name to its stored lower-case form."""
    standardized = (region or "").strip().lower()
    return REGION_NAME_ALIASES.get(standardized, standardized)


def is_valid_region(region_id: str) -> bool:
    return region_id in STANDARD_REGIONS or region_id == "skin"


def symptom_to_region() -> Dict[str, str]:
    """Return a fresh symptom-name -> region-id mapping for the catalog."""
    return dict(_SYMPTOM_TO_REGION)


def region_for_symptom(symptom: str) -> Optional[str]:
    return _SYMPTOM_TO_REGION.get(symptom)


def symptoms_for_region(region_id: str) -> List[str]:
    return [s.name for s in SYMPTOM_CATALOG if s.region_id == region_id]


def predefined_symptom_names() -> List[str]:
    return [s.name for s in SYMPTOM_CATALOG]


def standardize_symptom_name(symptom: str) -> str:
    """Trim a free-text symptom and fold common left/right variants onto catalog names."""
    standardized = (symptom or "").strip()
    lowered = standardized.lower()
    for needle, canonical in SYMPTOM_NAME_VARIANTS:
        if needle in lowered:
            return canonical
    return standardized


def severity_label(severity: int) -> str:
    return SEVERITY_LABELS.get(severity, "Unknown")
