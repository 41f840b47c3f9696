"""
SRG Data Logger

Persistence for SRG analysis results:

- JSON storage with full metadata (timestamp, version, analyzer settings)
- CSV export of boundary polygons and Nyquist samples for external tools
- Integrity verification via md5 checksums of the boundary coordinates

Data Schema
-----------
{
    "metadata": {
        "timestamp": "2026-10-18T12:00:00",
        "version": "1.0.0",
        "analyzer_config": { ... },
        "checksums": { "tank_level": "...", ... }
    },
    "systems": {
        "tank_level": {
            "frequencies_rad": [...],
            "response_real": [...],
            "response_imag": [...],
            "boundary_x": [...],
            "boundary_y": [...],
            "metrics": {
                "contains_critical_point": false,
                "critical_point_distance": 0.42,
                ...
            }
        },
        ...
    }
}

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import csv
import json
import hashlib
import numpy as np
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .srg_analyzer import SRGResult


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types, complex scalars and paths."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        if isinstance(obj, (complex, np.complexfloating)):
            return {'real': float(obj.real), 'imag': float(obj.imag)}
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def boundary_checksum(x: np.ndarray, y: np.ndarray) -> str:
    """md5 of the concatenated boundary coordinates."""
    combined = np.concatenate([np.asarray(x, dtype=float), np.asarray(y, dtype=float)])
    return hashlib.md5(combined.tobytes()).hexdigest()


@dataclass
class LoggerConfig:
    """
    Configuration for the SRG data logger.

    Attributes
    ----------
    output_dir : Path
        Directory for saved data files
    base_filename : str
        Base name for output files
    save_json : bool
        Save JSON format
    save_csv : bool
        Save boundary and response CSV files per system
    include_checksums : bool
        Add integrity checksums to metadata
    pretty_print : bool
        Format JSON with indentation
    timestamped : bool
        Append a start-time stamp to file names
    version : str
        Data format version string
    """
    output_dir: Path = field(default_factory=lambda: Path('srg_data'))
    base_filename: str = 'srg'
    save_json: bool = True
    save_csv: bool = True
    include_checksums: bool = True
    pretty_print: bool = True
    timestamped: bool = True
    version: str = '1.0.0'


class SRGDataLogger:
    """
    Data Logger for SRG Analysis Results.

    Example Usage
    -------------
    >>> logger = SRGDataLogger(LoggerConfig(output_dir=Path('data')))
    >>> logger.add_results_dict(analyzer.results)
    >>> logger.set_analyzer_config(analyzer.config)
    >>> logger.save()

    Parameters
    ----------
    config : LoggerConfig, optional
        Logger configuration
    verbose : bool
        Print saved file paths
    """

    def __init__(self, config: Optional[LoggerConfig] = None, verbose: bool = True):
        self.config = config or LoggerConfig()
        self.verbose = verbose
        self._results: Dict[str, SRGResult] = {}
        self._analyzer_config: Optional[Dict] = None
        self._custom_metadata: Dict[str, Any] = {}
        self._start_time = datetime.now()

    def add_result(self, result: SRGResult) -> None:
        """Add one system's SRG result (keyed by its name)."""
        self._results[result.name] = result

    def add_results_dict(self, results: Dict[str, SRGResult]) -> None:
        """Add multiple results at once."""
        self._results.update(results)

    def set_analyzer_config(self, config: Any) -> None:
        """
        Record the analyzer configuration for reproducibility.

        Parameters
        ----------
        config : Any
            Analyzer configuration (dataclass or dict)
        """
        if hasattr(config, '__dataclass_fields__'):
            self._analyzer_config = asdict(config)
        elif isinstance(config, dict):
            self._analyzer_config = config
        else:
            self._analyzer_config = {'raw': str(config)}

    def add_metadata(self, key: str, value: Any) -> None:
        """Add custom metadata (must be JSON-serializable)."""
        self._custom_metadata[key] = value

    def save(self, suffix: Optional[str] = None) -> Dict[str, Union[Path, List[Path]]]:
        """
        Save all data to disk.

        Parameters
        ----------
        suffix : str, optional
            Optional suffix for filename

        Returns
        -------
        Dict[str, Path | List[Path]]
            'json' -> JSON path, 'csv' -> list of CSV paths
        """
        saved_files = {}
        self.config.output_dir.mkdir(parents=True, exist_ok=True)

        base = self.config.base_filename
        if self.config.timestamped:
            base = f"{base}_{self._start_time.strftime('%Y%m%d_%H%M%S')}"
        if suffix:
            base = f"{base}_{suffix}"

        if self.config.save_json:
            json_path = self.config.output_dir / f"{base}.json"
            self._save_json(self._build_data_structure(), json_path)
            saved_files['json'] = json_path

        if self.config.save_csv:
            saved_files['csv'] = self._save_csv(base)

        return saved_files

    def _build_data_structure(self) -> Dict[str, Any]:
        data = {
            'metadata': self._build_metadata(),
            'systems': {},
        }
        for name, result in self._results.items():
            data['systems'][name] = self._serialize_result(result)
        return data

    def _build_metadata(self) -> Dict[str, Any]:
        metadata = {
            'timestamp': self._start_time.isoformat(),
            'version': self.config.version,
            'analysis_duration_s': (datetime.now() - self._start_time).total_seconds(),
        }
        if self._analyzer_config:
            metadata['analyzer_config'] = self._analyzer_config
        if self._custom_metadata:
            metadata['custom'] = self._custom_metadata
        if self.config.include_checksums:
            metadata['checksums'] = {
                name: boundary_checksum(result.boundary.x, result.boundary.y)
                for name, result in self._results.items()
            }
        return metadata

    def _serialize_result(self, result: SRGResult) -> Dict[str, Any]:
        curve = result.curve
        freqs = curve.frequencies.tolist() if curve.frequencies is not None else None
        return {
            'frequencies_rad': freqs,
            'response_real': curve.real.tolist(),
            'response_imag': curve.imag.tolist(),
            'boundary_x': result.boundary.x.tolist(),
            'boundary_y': result.boundary.y.tolist(),
            'metrics': {
                'contains_critical_point': bool(result.contains_critical_point),
                'critical_point_distance': float(result.critical_point_distance),
                'extent': [float(v) for v in result.extent],
                'tessellation_count': int(result.boundary.tessellation_count),
            },
            'metadata': result.metadata,
        }

    def _save_json(self, data: Dict, filepath: Path) -> None:
        indent = 2 if self.config.pretty_print else None
        with open(filepath, 'w') as f:
            json.dump(data, f, cls=NumpyEncoder, indent=indent)
        if self.verbose:
            print(f"  [JSON] Saved: {filepath}")

    def _save_csv(self, base: str) -> List[Path]:
        """Boundary (x, y) and response (ω, Re, Im) CSV files per system."""
        csv_paths = []

        for name, result in self._results.items():
            boundary_path = self.config.output_dir / f"{base}_{name}_boundary.csv"
            with open(boundary_path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(['x', 'y'])
                writer.writerows(np.asarray(result.boundary.points).tolist())
            csv_paths.append(boundary_path)

            response_path = self.config.output_dir / f"{base}_{name}_response.csv"
            curve = result.curve
            freqs = curve.frequencies if curve.frequencies is not None else np.full(len(curve), np.nan)
            with open(response_path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(['frequency_rad', 'real', 'imag'])
                for w, re, im in zip(freqs, curve.real, curve.imag):
                    writer.writerow([w, re, im])
            csv_paths.append(response_path)

            if self.verbose:
                print(f"  [CSV] Saved: {boundary_path.name}, {response_path.name}")

        return csv_paths

    @staticmethod
    def load_json(filepath: Union[str, Path]) -> Dict[str, Any]:
        """Load SRG data from a JSON file."""
        with open(filepath, 'r') as f:
            return json.load(f)

    @staticmethod
    def verify_checksum(filepath: Union[str, Path]) -> bool:
        """
        Verify boundary data integrity using stored checksums.

        Parameters
        ----------
        filepath : Path or str
            Path to JSON file

        Returns
        -------
        bool
            True if all checksums match (or none were stored)
        """
        data = SRGDataLogger.load_json(filepath)

        stored_checksums = data.get('metadata', {}).get('checksums')
        if stored_checksums is None:
            return True

        for name, system in data['systems'].items():
            computed = boundary_checksum(system['boundary_x'], system['boundary_y'])
            if computed != stored_checksums.get(name, ''):
                return False
        return True
