"""
Factory function for creating simulation environments.

Callers instantiate an environment by config or by arm preset name and
receive a Gymnasium ``VectorEnv`` wrapped in a ``{suite: {0: env}}`` mapping.

Functions:
    make_sim_env: Create one or more vectorised simulation environments.
"""

from __future__ import annotations

from typing import Dict

import gymnasium as gym

from robot_arm_sim.configs import preset_names
from robot_arm_sim.envs.configs import PickPlaceArmConfig, SimEnvConfig


def _resolve_config(cfg: SimEnvConfig | str) -> SimEnvConfig:
    """Convert a preset name to its default env config, or pass through a config.

    Args:
        cfg: Either a ``SimEnvConfig`` instance or an arm preset name.

    Returns:
        A concrete ``SimEnvConfig`` instance.

    Raises:
        ValueError: If the string name is not a known preset.
    """
    if isinstance(cfg, SimEnvConfig):
        return cfg
    if cfg not in preset_names():
        raise ValueError(f"Unknown env '{cfg}'. Choose from {list(preset_names())}")
    return PickPlaceArmConfig(preset=cfg)


def _env_class_for_config(cfg: SimEnvConfig) -> type:
    """Return the Gymnasium env class for *cfg*.

    Only ``PickPlaceArmConfig`` has an environment.

    Args:
        cfg: A concrete ``SimEnvConfig`` instance.

    Returns:
        ``PickPlaceArmEnv``.

    Raises:
        ValueError: If *cfg* is not a ``PickPlaceArmConfig``.
    """
    if not isinstance(cfg, PickPlaceArmConfig):
        raise ValueError(f"No env class for config type {type(cfg).__name__}")
    from robot_arm_sim.envs.pick_place import PickPlaceArmEnv

    return PickPlaceArmEnv


def _validate_n_envs(n_envs: int) -> None:
    """Reject a non-positive number of parallel environments.

    Args:
        n_envs: Requested number of vectorised copies.

    Raises:
        ValueError: When ``n_envs < 1``.
    """
    if n_envs < 1:
        raise ValueError("`n_envs` must be at least 1")


def _build_vector_env(
    env_cls: type, cfg: SimEnvConfig, n_envs: int, use_async: bool
) -> gym.vector.VectorEnv:
    """Construct a Gymnasium vector environment.

    Args:
        env_cls: The single-env Gymnasium class.
        cfg: Environment configuration forwarded to the constructor.
        n_envs: Number of parallel copies.
        use_async: If *True*, use ``AsyncVectorEnv``; otherwise ``SyncVectorEnv``.

    Returns:
        A ``VectorEnv`` wrapping *n_envs* instances.
    """
    wrapper_cls = gym.vector.AsyncVectorEnv if use_async else gym.vector.SyncVectorEnv
    fns = [lambda c=cfg: env_cls(c) for _ in range(n_envs)]
    return wrapper_cls(fns)


def make_sim_env(
    cfg: SimEnvConfig | str = "classic",
    n_envs: int = 1,
    use_async_envs: bool = False,
) -> Dict[str, Dict[int, gym.vector.VectorEnv]]:
    """Create vectorised simulation environments.

    Args:
        cfg: Either a ``SimEnvConfig`` instance or an arm preset name
            (``'classic'``, ``'free_wrist'``).
        n_envs: Number of parallel environments (default 1).
        use_async_envs: Whether to use ``AsyncVectorEnv`` (default *False*).

    Returns:
        ``{suite_name: {0: VectorEnv}}`` mapping.
    """
    resolved_cfg = _resolve_config(cfg)
    _validate_n_envs(n_envs)
    env_cls = _env_class_for_config(resolved_cfg)
    vec = _build_vector_env(env_cls, resolved_cfg, n_envs, use_async_envs)
    return {resolved_cfg.env_type: {0: vec}}
