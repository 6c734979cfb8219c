from rwmcmc.sinks.buffer import ChunkCounter, advance
from rwmcmc.sinks.hdf5 import ChunkedHDF5Sink
from rwmcmc.sinks.memory import InMemorySink

__all__ = [
    "ChunkCounter",
    "advance",
    "ChunkedHDF5Sink",
    "InMemorySink",
]
