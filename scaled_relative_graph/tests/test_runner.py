"""
Tests for the command-line runner and its configuration mapping.
"""

import json

import pytest
import numpy as np

from scaled_relative_graph.core.frequency_response import FrequencyGridConfig
from scaled_relative_graph.runner import (
    DEFAULT_CONFIG_PATH,
    build_analyzer,
    load_benchmark_config,
    main,
    map_config_to_kwargs,
)


class TestConfigLoading:

    def test_shipped_config(self):
        config = load_benchmark_config(DEFAULT_CONFIG_PATH)

        assert config['analysis']['tessellation_count'] == 20
        assert set(config['systems']) == {
            'mass_spring_damper', 'dc_motor_pi', 'tank_level', 'saturated_opamp'
        }

    def test_missing_file_falls_back(self, tmp_path, capsys):
        config = load_benchmark_config(tmp_path / 'absent.json')

        assert config == {}
        assert "Configuration notice" in capsys.readouterr().out

    def test_malformed_file(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{"analysis": ')

        with pytest.raises(ValueError, match="Failed to parse"):
            load_benchmark_config(path)


class TestConfigMapping:

    def test_full_mapping(self):
        kwargs = map_config_to_kwargs({
            'analysis': {'tessellation_count': 12, 'max_points': 50,
                         'critical_point': [-1.0, 0.0], 'parallel': True},
            'output': {'output_dir': 'out', 'base_filename': 'b', 'save_csv': False},
            'systems': {
                'tank_level': {'srg_grid': {'decades': [0.0, 1.0], 'step': 0.1}},
                'saturated_opamp': {'srg_grid': {'w_min': 0.5, 'w_max': 50.0, 'n_points': 30}},
                'dc_motor_pi': {},
            },
        })

        assert kwargs['analyzer'] == {
            'tessellation_count': 12, 'max_points': 50, 'parallel': True,
            'critical_point': -1 + 0j,
        }
        assert kwargs['logger']['base_filename'] == 'b'
        assert kwargs['logger']['save_csv'] is False
        assert str(kwargs['logger']['output_dir']) == 'out'

        grids = kwargs['grids']
        assert set(grids) == {'tank_level', 'saturated_opamp'}
        assert grids['tank_level'].get_frequency_vector().size == 11
        assert grids['saturated_opamp'] == FrequencyGridConfig(0.5, 50.0, 30)

    def test_empty_config(self):
        assert map_config_to_kwargs({}) == {'analyzer': {}, 'logger': {}, 'grids': {}}

    def test_build_analyzer_grid_override(self):
        grid = FrequencyGridConfig(1.0, 10.0, 12)
        analyzer = build_analyzer(['tank_level'], {'verbose': False}, {'tank_level': grid})
        result = analyzer.run_single_system_analysis('tank_level')

        assert len(result.curve) == 12
        np.testing.assert_allclose(result.curve.frequencies, grid.get_frequency_vector())


class TestMain:

    def test_no_save_run(self, capsys):
        code = main(['--systems', 'saturated_opamp', 'tank_level', '--no-save', '--quiet'])

        assert code == 0
        assert capsys.readouterr().out == ''

    def test_summary_printed(self, capsys):
        code = main(['--systems', 'mass_spring_damper', '--tessellation', '5', '--no-save'])
        out = capsys.readouterr().out

        assert code == 0
        assert "SRG SUMMARY" in out
        assert "mass_spring_damper" in out

    def test_saves_outputs(self, tmp_path):
        code = main([
            '--systems', 'tank_level', 'saturated_opamp',
            '--output-dir', str(tmp_path),
            '--max-points', '60',
            '--parallel',
            '--quiet',
        ])

        assert code == 0
        json_files = list(tmp_path.glob('*.json'))
        assert len(json_files) == 1
        assert len(list(tmp_path.glob('*_boundary.csv'))) == 2

        data = json.loads(json_files[0].read_text())
        assert set(data['systems']) == {'tank_level', 'saturated_opamp'}
        assert data['metadata']['custom']['systems'] == ['tank_level', 'saturated_opamp']
        assert data['metadata']['analyzer_config']['parallel'] is True
        assert data['systems']['tank_level']['metadata']['n_srg_samples'] == 60

    def test_runs_without_config_file(self, tmp_path):
        code = main(['--systems', 'saturated_opamp', '--config', str(tmp_path / 'none.json'),
                     '--no-save', '--quiet'])
        assert code == 0

    def test_invalid_tessellation_fails(self, capsys):
        code = main(['--systems', 'saturated_opamp', '--tessellation', '0', '--no-save',
                     '--quiet'])

        assert code == 1
        assert "ANALYSIS FAILED" in capsys.readouterr().out

    def test_unknown_system_rejected(self):
        with pytest.raises(SystemExit):
            main(['--systems', 'inverted_pendulum'])


class TestCaseSweeps:

    def test_build_analyzer_with_cases(self):
        analyzer = build_analyzer([], {'verbose': False}, {}, cases=['tank_gain'])
        assert analyzer.registered_systems == [
            'tank_level_kp_1', 'tank_level_kp_3', 'tank_level_kp_6'
        ]

    def test_benchmarks_then_cases(self):
        analyzer = build_analyzer(['saturated_opamp'], {'verbose': False}, {},
                                  cases=['damping'])
        assert analyzer.registered_systems == [
            'saturated_opamp',
            'mass_spring_damper_zeta_0.2',
            'mass_spring_damper_zeta_1',
            'mass_spring_damper_zeta_2',
        ]

    def test_opamp_scored_at_sector_critical_point(self):
        analyzer = build_analyzer(['saturated_opamp'], {'verbose': False,
                                                        'critical_point': 5 + 0j}, {})
        result = analyzer.run_single_system_analysis('saturated_opamp')

        assert result.metadata['critical_point'] == pytest.approx(-1 + 0j)

    def test_main_runs_case_sweeps_only(self, tmp_path):
        code = main(['--systems', '--cases', 'damping', 'tank_gain',
                     '--output-dir', str(tmp_path), '--tessellation', '5', '--quiet'])

        assert code == 0
        data = json.loads(next(tmp_path.glob('*.json')).read_text())
        assert len(data['systems']) == 6
        assert 'tank_level_kp_6' in data['systems']
        assert data['metadata']['custom']['cases'] == ['damping', 'tank_gain']

    def test_main_nothing_selected(self, capsys):
        code = main(['--systems', '--no-save', '--quiet'])

        assert code == 1
        assert "Nothing to analyze" in capsys.readouterr().out

    def test_unknown_case_rejected(self):
        with pytest.raises(SystemExit):
            main(['--cases', 'stiffness'])
