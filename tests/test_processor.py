import math

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from expression_pipeline import processor
from expression_pipeline.errors import InsufficientDataError, NotFoundError, SymbolNotFoundError
from expression_pipeline.extractor import extract_values
from expression_pipeline.processor import (
    STUDENT_METHOD,
    WELCH_METHOD,
    compare_groups,
    run_gene_comparison,
)


def test_compare_groups_welch(small_dataset):
    values = extract_values(small_dataset, 'p1')
    frame, box_stats, result = compare_groups(values, small_dataset.group_labels, levels=['positive', 'negative'])

    assert result.method == WELCH_METHOD
    assert result.groups == ('positive', 'negative')
    assert result.estimates == {'positive': 11.0, 'negative': 5.0}
    # equal variances (1.0) and n=3 per group: t = 6 / sqrt(2/3), df = 4
    assert result.statistic == pytest.approx(6 / math.sqrt(2 / 3))
    assert result.df == pytest.approx(4.0)
    assert 0.0 <= result.pvalue <= 1.0
    assert result.conf_int[0] < 6.0 < result.conf_int[1]

    assert len(frame) == 6
    assert list(frame.columns) == ['sample', 'group', 'value']
    assert box_stats['group'].tolist() == ['positive', 'negative']
    assert box_stats['n'].tolist() == [3, 3]
    assert box_stats['median'].tolist() == [11.0, 5.0]


def test_compare_groups_matches_scipy(small_dataset):
    values = extract_values(small_dataset, 'p2')
    _, _, result = compare_groups(values, small_dataset.group_labels, levels=['positive', 'negative'])

    expected = stats.ttest_ind([5.0, 5.5, 4.5], [5.2, 4.8, 5.1], equal_var=False)
    assert result.statistic == pytest.approx(expected.statistic)
    assert result.pvalue == pytest.approx(expected.pvalue)


def test_compare_groups_student(small_dataset):
    values = extract_values(small_dataset, 'p1')
    _, _, result = compare_groups(values, small_dataset.group_labels, equal_var=True)
    assert result.method == STUDENT_METHOD
    assert result.df == pytest.approx(4.0)


def test_levels_default_to_sorted_labels(small_dataset):
    values = extract_values(small_dataset, 'p1')
    _, _, result = compare_groups(values, small_dataset.group_labels)
    assert result.groups == ('negative', 'positive')
    assert result.statistic < 0


def test_zero_variance_raises(small_dataset):
    values = extract_values(small_dataset, 'p3')
    with pytest.raises(InsufficientDataError, match='zero variance'):
        compare_groups(values, small_dataset.group_labels)


def test_group_with_single_observation_raises(small_dataset):
    labels = small_dataset.group_labels.copy()
    labels[['S4', 'S5']] = 'positive'
    with pytest.raises(InsufficientDataError, match="Group 'negative' has 1"):
        compare_groups(extract_values(small_dataset, 'p1'), labels)


def test_single_group_raises(small_dataset):
    labels = pd.Series('positive', index=small_dataset.samples)
    with pytest.raises(InsufficientDataError, match='two distinct groups'):
        compare_groups(extract_values(small_dataset, 'p1'), labels)


def test_three_groups_need_explicit_levels(small_dataset):
    labels = small_dataset.group_labels.copy()
    labels[['S3', 'S6']] = 'unknown'
    values = extract_values(small_dataset, 'p1')

    with pytest.raises(InsufficientDataError, match='Expected two groups'):
        compare_groups(values, labels)

    frame, _, result = compare_groups(values, labels, levels=['positive', 'negative'])
    assert len(frame) == 4
    assert result.estimates == {'positive': 10.5, 'negative': 4.5}


def test_missing_values_and_labels_are_dropped(small_dataset):
    values = extract_values(small_dataset, 'p1')
    values['S1'] = np.nan
    labels = small_dataset.group_labels.copy()
    labels['S6'] = None

    frame, box_stats, result = compare_groups(values, labels, levels=['positive', 'negative'])
    assert set(frame['sample']) == {'S2', 'S3', 'S4', 'S5'}
    assert box_stats['n'].tolist() == [2, 2]
    assert result.estimates['positive'] == pytest.approx(11.5)


def test_pipeline_uses_first_probe(small_dataset):
    comparison = run_gene_comparison(small_dataset, 'GENEA')
    assert comparison.identifier == 'p2'
    assert comparison.candidates == ('p2', 'p1')
    assert comparison.test.groups == ('positive', 'negative')


def test_pipeline_unknown_symbol_skips_extraction(small_dataset, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError('extraction should not run')

    monkeypatch.setattr(processor, 'extract_values', fail)
    with pytest.raises(SymbolNotFoundError) as excinfo:
        run_gene_comparison(small_dataset, 'NOTAREALGENE')

    assert excinfo.value.symbol == 'NOTAREALGENE'
    assert isinstance(excinfo.value, NotFoundError)


def test_esr1_differs_by_er_status(demo_dataset):
    comparison = run_gene_comparison(demo_dataset, 'ESR1')
    assert comparison.identifier == '205225_at'
    assert comparison.test.pvalue < 0.05
    assert comparison.test.estimates['positive'] > comparison.test.estimates['negative']


def test_pipeline_is_idempotent(demo_dataset):
    first = run_gene_comparison(demo_dataset, 'GATA3')
    second = run_gene_comparison(demo_dataset, 'GATA3')
    assert first.test == second.test
    pd.testing.assert_frame_equal(first.box_stats, second.box_stats)


def test_housekeeping_pvalue_in_unit_interval(demo_dataset):
    comparison = run_gene_comparison(demo_dataset, 'ACTB')
    assert 0.0 <= comparison.test.pvalue <= 1.0


def test_pipeline_looks_up_symbol_once(small_dataset, monkeypatch):
    calls = []
    lookup = processor.find_identifiers

    def counting_lookup(dataset, symbol):
        calls.append(symbol)
        return lookup(dataset, symbol)

    monkeypatch.setattr(processor, 'find_identifiers', counting_lookup)
    comparison = run_gene_comparison(small_dataset, 'GENEA')

    assert calls == ['GENEA']
    assert comparison.identifier == comparison.candidates[0]
