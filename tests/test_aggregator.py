"""Unit tests for the parallel aggregator."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import numpy as np
import pytest

from compute_demo.compute.aggregator import (
    AggregateOutcome,
    Aggregator,
    aggregate_values,
    partial_sum,
    partition,
    sequential_sum,
)
from compute_demo.compute.random_source import NumpyRandomSource
from compute_demo.exceptions import AggregationError


@pytest.fixture(scope="module")
def fixed_values():
    return NumpyRandomSource(seed=1234).draw(10_001, 0, 10_000)


class TestPartialSum:
    """Tests for the per-partition reduction."""
    
    def test_even_values_only(self):
        """Test only even values contribute their squares."""
        assert partial_sum(np.array([1, 2, 3, 4], dtype=np.uint32)) == 4 + 16
    
    def test_zero_is_even(self):
        """Test zero contributes nothing but is not an error."""
        assert partial_sum(np.array([0, 0], dtype=np.uint32)) == 0
    
    def test_largest_term_does_not_overflow(self):
        """Test 9998**2 is squared in 64 bits, not 32."""
        chunk = np.array([9998] * 1000, dtype=np.uint32)
        
        assert partial_sum(chunk) == 1000 * 9998**2
    
    def test_uint64_headroom_for_a_billion_terms(self):
        """Test the worst-case sum for 10**9 values fits in uint64."""
        assert 10**9 * 9998**2 < np.iinfo(np.uint64).max


class TestPartition:
    """Tests for splitting arrays into worker slices."""
    
    def test_covers_all_values_in_order(self):
        """Test slices are contiguous and lose nothing."""
        values = np.arange(10)
        chunks = partition(values, 3)
        
        assert len(chunks) == 3
        assert np.concatenate(chunks).tolist() == list(range(10))
    
    def test_never_more_parts_than_values(self):
        """Test no empty slices are produced."""
        chunks = partition(np.arange(2), 8)
        
        assert len(chunks) == 2
        assert all(len(chunk) for chunk in chunks)
    
    def test_empty_input(self):
        """Test an empty array gives no slices."""
        assert partition(np.array([], dtype=np.uint32), 4) == []
    
    def test_parts_must_be_positive(self):
        """Test zero parts is rejected."""
        with pytest.raises(ValueError):
            partition(np.arange(3), 0)


class TestAggregateValues:
    """Tests for the combined parallel reduction."""
    
    @pytest.mark.parametrize("workers", [1, 2, 3, 7, 16, 64])
    def test_partition_invariance(self, fixed_values, workers):
        """Test the sum is the same however the array is split."""
        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = aggregate_values(fixed_values, workers=workers, executor=executor)
        
        assert parallel == aggregate_values(fixed_values, workers=1)
    
    def test_matches_sequential_reference(self, fixed_values):
        """Test parallel result equals the naive filter-square-sum."""
        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = aggregate_values(fixed_values, workers=4, executor=executor)
        
        assert parallel == sequential_sum(fixed_values.tolist())
    
    def test_empty_array(self):
        """Test the empty array sums to zero."""
        assert aggregate_values(np.array([], dtype=np.uint32), workers=4) == 0
        assert sequential_sum([]) == 0
    
    def test_all_odd_array(self):
        """Test an array without even values sums to zero."""
        values = np.arange(1, 2001, 2, dtype=np.uint32)
        
        assert aggregate_values(values, workers=5) == 0
        assert sequential_sum(values.tolist()) == 0
    
    def test_accepts_plain_lists(self):
        """Test lists are converted before partitioning."""
        assert aggregate_values([2, 3, 4], workers=2) == 20
    
    def test_worker_failure_raises_aggregation_error(self):
        """Test a failing partition surfaces as AggregationError."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            with patch(
                "compute_demo.compute.aggregator.partial_sum",
                side_effect=ValueError("boom"),
            ):
                with pytest.raises(AggregationError) as exc_info:
                    aggregate_values(np.arange(10), workers=2, executor=executor)
        
        assert exc_info.value.code == "AGGREGATION_FAILED"
        assert exc_info.value.partitions == 2


class TestAggregator:
    """Tests for the pooled aggregator."""
    
    def test_aggregate_with_injected_sequence(self, sequence_aggregator):
        """Test a replayed 0..9 sequence gives a known sum."""
        outcome = sequence_aggregator.aggregate(20)
        
        # evens 0,2,4,6,8 squared sum to 120, twice
        assert outcome == AggregateOutcome(sum=240, count_generated=20)
    
    def test_aggregate_zero(self, sequence_aggregator):
        """Test n = 0 generates nothing and sums to zero."""
        outcome = sequence_aggregator.aggregate(0)
        
        assert outcome.sum == 0
        assert outcome.count_generated == 0
    
    def test_negative_size_rejected(self, sequence_aggregator):
        """Test a negative count is a programming error."""
        with pytest.raises(ValueError):
            sequence_aggregator.aggregate(-1)
    
    def test_generate_range(self):
        """Test generated values lie in [0, 10000)."""
        aggregator = Aggregator(workers=2, random_source=NumpyRandomSource(seed=9))
        try:
            values = aggregator.generate(50_000)
        finally:
            aggregator.close()
        
        assert len(values) == 50_000
        assert values.min() >= 0
        assert values.max() < 10_000
    
    def test_reduce_matches_reference(self):
        """Test pooled reduction equals the sequential sum."""
        aggregator = Aggregator(workers=3, random_source=NumpyRandomSource(seed=11))
        try:
            values = aggregator.generate(9_999)
            assert aggregator.reduce(values) == sequential_sum(values.tolist())
        finally:
            aggregator.close()
    
    def test_default_workers_from_cpu_count(self):
        """Test the pool size defaults to the CPU count."""
        with patch("compute_demo.compute.aggregator.os.cpu_count", return_value=3):
            aggregator = Aggregator()
        try:
            assert aggregator.workers == 3
            assert isinstance(aggregator.random_source, NumpyRandomSource)
        finally:
            aggregator.close()
