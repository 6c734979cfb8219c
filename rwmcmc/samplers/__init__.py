from rwmcmc.samplers.single_chain import RWMsampler, run_rwm

__all__ = [
    "RWMsampler",
    "run_rwm",
]
