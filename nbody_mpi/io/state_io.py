"""State I/O for saving and loading body stores."""

import numpy as np
import json
from typing import Tuple, Dict, Any, Optional
from pathlib import Path
from nbody_mpi.physics.bodies import BodyStore


def save_state(
    store: BodyStore,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save a body store to file.

    Args:
        store: Bodies to save
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary
    """
    output_path = Path(output_path)

    if output_path.suffix == '.npz':
        # NumPy compressed format
        save_dict = {
            'positions': store.positions,
            'accelerations': store.accelerations,
            'velocities': store.velocities,
            'masses': store.masses
        }
        if metadata:
            # Convert metadata to arrays/strings for npz
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    elif output_path.suffix == '.json':
        # JSON format (less efficient but human-readable)
        state_dict = {
            'positions': store.positions.tolist(),
            'accelerations': store.accelerations.tolist(),
            'velocities': store.velocities.tolist(),
            'masses': store.masses.tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(state_dict, f, indent=2)

    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_state(input_path: str) -> Tuple[BodyStore, Dict[str, Any]]:
    """Load a body store from file.

    Args:
        input_path: Input file path

    Returns:
        Tuple of (store, metadata)
    """
    input_path = Path(input_path)

    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            store = BodyStore.from_arrays(
                data['positions'], data['velocities'], data['masses'],
                accelerations=data['accelerations']
            )

            # Extract metadata
            metadata = {}
            for key in data.keys():
                if key.startswith('metadata_'):
                    metadata[key[9:]] = data[key].item() if hasattr(data[key], 'item') else data[key]

        return store, metadata

    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            state_dict = json.load(f)

        store = BodyStore.from_arrays(
            np.array(state_dict['positions']),
            np.array(state_dict['velocities']),
            np.array(state_dict['masses']),
            accelerations=np.array(state_dict['accelerations'])
        )
        metadata = state_dict.get('metadata', {})

        return store, metadata

    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")
