"""Mixed ordering workload scenario.

Combines the ordering journeys with weights that model realistic storefront
traffic. This is the recommended scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.ordering import (
    CartJourney,
    OrderCancellationJourney,
    OrderLifecycleJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    - Cart journeys: browsing, editing and checking out (most common)
    - Order lifecycle: direct orders moved through to delivery
    - Cancellation: unhappy path, verifies stock release
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        CartJourney: 6,
        OrderLifecycleJourney: 4,
        OrderCancellationJourney: 2,
    }
