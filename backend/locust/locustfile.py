"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test double booking
  locust -f locustfile.py --tags throughput   # Test spot search cache
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from datetime import date, timedelta
from locust import HttpUser, task, between, tag, events

# Shared state
SPOT_IDS = []
CONTESTED_SPOT_ID = None
CONTESTED_STAY = {"startDate": "2030-07-01", "endDate": "2030-07-07"}

SPOT_PAYLOAD = {
    "address": "1 Load Test Way",
    "city": "Testville",
    "state": "Nowhere",
    "country": "Testland",
    "name": "Load Test Cabin",
    "description": "Built to be booked by everyone at once",
}


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


def register_and_login(client):
    """Create a throwaway account and return auth headers (empty on failure)."""
    username = random_username()
    email = f"{username}@loadtest.com"
    client.post("/api/auth/register", json={
        "email": email,
        "username": username,
        "firstName": "Load",
        "lastName": "Tester",
        "password": "loadtest123",
    })
    resp = client.post("/api/auth/login", json={"email": email, "password": "loadtest123"})
    if resp.status_code != 200:
        return {}
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def spot_payload():
    return {
        **SPOT_PAYLOAD,
        "lat": round(random.uniform(-60, 60), 4),
        "lng": round(random.uniform(-170, 170), 4),
        "price": random.randint(40, 400),
    }


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: first ConcurrencyUser creates the contested spot")
    print("=" * 60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - N users -> the same dates on one spot

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT COUNT(*) FROM bookings WHERE spot_id = X AND start_date <= '2030-07-07'
        AND end_date >= '2030-07-01';
    Should be exactly 1
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = register_and_login(self.client)
        if self.headers and not CONTESTED_SPOT_ID:
            resp = self.client.post("/api/spots/", json=spot_payload(), headers=self.headers)
            if resp.status_code == 201:
                globals()["CONTESTED_SPOT_ID"] = resp.json()["id"]
                print(f"\nCreated contested spot {CONTESTED_SPOT_ID}\n")

    @tag("concurrency")
    @task
    def book_contested_dates(self):
        """Everyone asks for the same week."""
        if not CONTESTED_SPOT_ID or not self.headers:
            return

        with self.client.post(
            f"/api/spots/{CONTESTED_SPOT_ID}/bookings",
            json=CONTESTED_STAY,
            headers=self.headers,
            name="/api/spots/{id}/bookings [contested]",
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 403):
                resp.success()  # 403: already booked
            elif resp.status_code == 503:
                resp.success()  # lock wait or calendar read timed out
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Spot search cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again

    Compare avg response time, requests/sec and P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def search_spots_cached(self):
        page = random.randint(0, 3)
        self.client.get(f"/api/spots/?page={page}&size=20", name="/api/spots/ [cached]")

    @tag("throughput", "read")
    @task(3)
    def search_spots_filtered(self):
        self.client.get("/api/spots/?minPrice=100&maxPrice=250", name="/api/spots/ [filtered]")

    @tag("throughput", "read")
    @task(3)
    def get_spot_detail(self):
        if SPOT_IDS:
            self.client.get(f"/api/spots/{random.choice(SPOT_IDS)}", name="/api/spots/{id}")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = register_and_login(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def missing_spot(self):
        with self.client.post(
            "/api/spots/999999/bookings",
            json={"startDate": "2030-01-01", "endDate": "2030-01-03"},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def end_before_start(self):
        if not SPOT_IDS:
            return
        with self.client.post(
            f"/api/spots/{random.choice(SPOT_IDS)}/bookings",
            json={"startDate": "2030-01-05", "endDate": "2030-01-01"},
            headers=self.headers,
            name="/api/spots/{id}/bookings [invalid range]",
            catch_response=True,
        ) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def oversized_page(self):
        with self.client.get("/api/spots/?page=999&size=999", catch_response=True) as resp:
            self._expect(resp, (200,))

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/spots/1/bookings",
            data="not json at all",
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 404, 422))

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post(
            "/api/spots/1/bookings",
            json={"startDate": "2030-01-01", "endDate": "2030-01-03"},
            catch_response=True,
        ) as resp:
            self._expect(resp, (401,))


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some bookings and reviews, rare new listings.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = register_and_login(self.client)

    @task(50)
    def browse_spots(self):
        resp = self.client.get("/api/spots/?page=0&size=20")
        if resp.status_code == 200:
            for spot in resp.json().get("Spots", []):
                if spot["id"] not in SPOT_IDS:
                    SPOT_IDS.append(spot["id"])

    @task(20)
    def view_spot(self):
        if SPOT_IDS:
            spot_id = random.choice(SPOT_IDS)
            self.client.get(f"/api/spots/{spot_id}", name="/api/spots/{id}")
            self.client.get(f"/api/spots/{spot_id}/reviews", name="/api/spots/{id}/reviews")

    @task(10)
    def book_stay(self):
        if SPOT_IDS and self.headers:
            start = date(2030, 1, 1) + timedelta(days=random.randint(0, 360))
            end = start + timedelta(days=random.randint(1, 7))
            self.client.post(
                f"/api/spots/{random.choice(SPOT_IDS)}/bookings",
                json={"startDate": start.isoformat(), "endDate": end.isoformat()},
                headers=self.headers,
                name="/api/spots/{id}/bookings",
            )

    @task(5)
    def review_spot(self):
        if SPOT_IDS and self.headers:
            self.client.post(
                f"/api/spots/{random.choice(SPOT_IDS)}/reviews",
                json={"review": "Would stay again", "stars": random.randint(1, 5)},
                headers=self.headers,
                name="/api/spots/{id}/reviews",
            )

    @task(3)
    def create_spot(self):
        if self.headers:
            resp = self.client.post("/api/spots/", json=spot_payload(), headers=self.headers)
            if resp.status_code == 201:
                SPOT_IDS.append(resp.json()["id"])
