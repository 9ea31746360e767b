"""
Unit tests for Circuit Breaker pattern.
"""

import asyncio
from datetime import timedelta

import pytest

from lessonshop.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState
)


class ServiceDown(Exception):
    """Failure counted by the breakers under test."""
    pass


async def failing_call():
    raise ServiceDown("connection refused")


async def succeeding_call(value="ok"):
    return value


async def open_circuit(cb: CircuitBreaker, failures: int):
    for _ in range(failures):
        with pytest.raises(ServiceDown):
            await cb.call(failing_call)


class TestCircuitBreaker:
    """Test cases for CircuitBreaker."""

    def test_initial_state_closed(self):
        """Test circuit breaker starts in CLOSED state."""
        cb = CircuitBreaker(failure_threshold=3)

        assert cb.state == CircuitState.CLOSED
        assert not cb.is_open
        assert cb.failure_count == 0

    @pytest.mark.asyncio
    async def test_successful_call(self):
        """Test successful coroutine call passes arguments and result through."""
        cb = CircuitBreaker(failure_threshold=3, expected_exception=ServiceDown)

        result = await cb.call(succeeding_call, value="lessons")

        assert result == "lessons"
        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    @pytest.mark.asyncio
    async def test_failure_increments_count(self):
        """Test failure increments counter without opening early."""
        cb = CircuitBreaker(failure_threshold=3, expected_exception=ServiceDown)

        await open_circuit(cb, 1)

        assert cb.failure_count == 1
        assert cb.state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_success_resets_count(self):
        """Test failures must be consecutive to open the circuit."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=ServiceDown)

        await open_circuit(cb, 1)
        await cb.call(succeeding_call)
        await open_circuit(cb, 1)

        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 1

    @pytest.mark.asyncio
    async def test_open_circuit_blocks_calls(self):
        """Test OPEN circuit fails fast without awaiting the call."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=ServiceDown)
        await open_circuit(cb, 2)

        assert cb.is_open

        called = []

        async def tracked():
            called.append(True)

        with pytest.raises(CircuitBreakerOpenError):
            await cb.call(tracked)
        assert called == []

    @pytest.mark.asyncio
    async def test_success_in_half_open_closes_circuit(self):
        """Test circuit recovers after the timeout."""
        cb = CircuitBreaker(
            failure_threshold=2,
            timeout=timedelta(milliseconds=50),
            expected_exception=ServiceDown
        )
        await open_circuit(cb, 2)

        await asyncio.sleep(0.1)

        assert await cb.call(succeeding_call, "recovered") == "recovered"
        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    @pytest.mark.asyncio
    async def test_failure_in_half_open_reopens_circuit(self):
        """Test a failed trial call reopens the circuit."""
        cb = CircuitBreaker(
            failure_threshold=2,
            timeout=timedelta(milliseconds=50),
            expected_exception=ServiceDown
        )
        await open_circuit(cb, 2)

        await asyncio.sleep(0.1)
        await open_circuit(cb, 1)

        assert cb.state == CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_different_exception_not_counted(self):
        """Test unexpected exception types propagate but are not counted."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=ServiceDown)

        async def bad_payload():
            raise ValueError("Different error")

        with pytest.raises(ValueError):
            await cb.call(bad_payload)

        assert cb.failure_count == 0
        assert cb.state == CircuitState.CLOSED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
