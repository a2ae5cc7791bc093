# config.py
DEFAULT_QUALITY = "medium"

# Image width (square images use it for height too), samples per pixel, max bounce depth.
QUALITY_PRESETS = {
    "draft":  {"width": 400,  "samples": 10,   "depth": 3},
    "low":    {"width": 800,  "samples": 50,   "depth": 15},
    "medium": {"width": 1200, "samples": 250,  "depth": 40},
    "high":   {"width": 1920, "samples": 500,  "depth": 60},
    "ultra":  {"width": 2560, "samples": 1000, "depth": 150},
}

# The Cornell box converges slowly and gets heavier settings per preset.
CORNELL_QUALITY_PRESETS = {
    "draft":  {"width": 400,  "samples": 50,   "depth": 8},
    "low":    {"width": 800,  "samples": 150,  "depth": 20},
    "medium": {"width": 1200, "samples": 500,  "depth": 50},
    "high":   {"width": 1920, "samples": 1000, "depth": 80},
    "ultra":  {"width": 2560, "samples": 4000, "depth": 200},
}


def quality_settings(quality: str, scene: str = "") -> dict:
    """Width/samples/depth for a preset name; raises ValueError for unknown names."""
    presets = CORNELL_QUALITY_PRESETS if scene == "cornell" else QUALITY_PRESETS
    if quality not in presets:
        raise ValueError(f"Unknown quality preset: {quality!r} (expected one of {tuple(presets)})")
    return dict(presets[quality])
