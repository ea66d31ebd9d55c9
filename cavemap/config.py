# cavemap/config.py
"""Generation settings and their validation.

Keys may be given in snake_case or in camelCase (``chanceToStartAlive``,
``regionAmount`` and so on), the names used by scene-editor presets.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

import structlog

from cavemap.validation import (
    require_bool,
    require_color,
    require_int,
    require_non_negative_int,
    require_non_negative_number,
    require_positive_int,
    require_probability,
)
from cavemap.world.grid import RED

log = structlog.get_logger(__name__)

CONFIG_ALIASES: Dict[str, str] = {
    "chanceToStartAlive": "chance_to_start_alive",
    "birthLimit": "birth_limit",
    "deathLimit": "death_limit",
    "numberOfSteps": "number_of_steps",
    "regionAmount": "region_amount",
    "mosaicSeed": "mosaic_seed",
    "useMeanColor": "use_mean_color",
    "numberOfTreasures": "number_of_treasures",
    "crossSize": "cross_size",
    "treasureSeed": "treasure_seed",
    "markerColor": "marker_color",
    "showIntermediateSteps": "show_intermediate_steps",
    "stepDelay": "step_delay",
    "outputDir": "output_dir",
    "caveFileName": "cave_file",
    "mosaicFileName": "mosaic_file",
    "saveFileName": "output_file",
}


@dataclass
class GeneratorConfig:
    # Cave automaton
    width: int = 128
    height: int = 128
    seed: int = 0
    chance_to_start_alive: float = 0.45
    birth_limit: int = 4
    death_limit: int = 3
    number_of_steps: int = 5
    # Mosaic
    region_amount: int = 64
    mosaic_seed: Optional[int] = None
    use_mean_color: bool = True
    # Treasures
    number_of_treasures: int = 10
    cross_size: int = 5
    treasure_seed: Optional[int] = None
    marker_color: Tuple[float, float, float, float] = RED
    # Presentation and output
    show_intermediate_steps: bool = False
    step_delay: float = 0.2
    output_dir: str = "output"
    cave_file: str = "CaveMap.png"
    mosaic_file: str = "VoronoiMosaicResult.png"
    output_file: str = "CaveMosaicMap.png"

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "GeneratorConfig":
        """Build a config from a parsed YAML/dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in (mapping or {}).items():
            name = CONFIG_ALIASES.get(key, key)
            if name not in known:
                log.warning("Ignoring unknown config key", key=key)
                continue
            values[name] = value
        if isinstance(values.get("marker_color"), list):
            values["marker_color"] = tuple(values["marker_color"])
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def effective_mosaic_seed(self) -> int:
        return self.seed if self.mosaic_seed is None else self.mosaic_seed

    @property
    def effective_treasure_seed(self) -> int:
        return self.seed if self.treasure_seed is None else self.treasure_seed

    def validate(self) -> "GeneratorConfig":
        """Raise ``InvalidConfig`` on the first out-of-range setting."""
        require_positive_int("width", self.width)
        require_positive_int("height", self.height)
        require_non_negative_int("seed", self.seed)
        require_probability("chance_to_start_alive", self.chance_to_start_alive)
        require_int("birth_limit", self.birth_limit)
        require_int("death_limit", self.death_limit)
        require_non_negative_int("number_of_steps", self.number_of_steps)
        require_positive_int("region_amount", self.region_amount)
        if self.mosaic_seed is not None:
            require_non_negative_int("mosaic_seed", self.mosaic_seed)
        require_bool("use_mean_color", self.use_mean_color)
        require_non_negative_int("number_of_treasures", self.number_of_treasures)
        require_non_negative_int("cross_size", self.cross_size)
        if self.treasure_seed is not None:
            require_non_negative_int("treasure_seed", self.treasure_seed)
        require_color("marker_color", self.marker_color)
        require_non_negative_number("step_delay", self.step_delay)
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["marker_color"] = list(self.marker_color)
        return data


__all__ = ["CONFIG_ALIASES", "GeneratorConfig"]
