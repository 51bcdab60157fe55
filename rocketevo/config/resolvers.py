from omegaconf import ListConfig, OmegaConf


def _vec3(*components) -> list[float]:
    """``${vec3:x,y,z}`` or ``${vec3:${some.list}}`` -> three floats."""
    if len(components) == 1 and isinstance(components[0], (list, tuple, ListConfig)):
        components = tuple(components[0])
    if len(components) != 3:
        raise ValueError(f"vec3 expects 3 components, got {len(components)}")
    return [float(c) for c in components]


def register_resolvers() -> None:
    if OmegaConf.has_resolver("eval"):
        return
    OmegaConf.register_new_resolver("eval", eval)
    OmegaConf.register_new_resolver("vec3", _vec3)
