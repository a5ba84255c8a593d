import urllib.request
import urllib.error
import json
import uuid

BASE = "http://localhost:8000/api/v1"

def post(path, body):
    data = json.dumps(body).encode()
    req = urllib.request.Request(
        f"{BASE}{path}",
        data=data,
        headers={"Content-Type": "application/json"}
    )
    try:
        with urllib.request.urlopen(req) as r:
            return json.loads(r.read())
    except urllib.error.HTTPError as e:
        return json.loads(e.read())

def get(path, params=None):
    url = f"{BASE}{path}"
    if params:
        url += "?" + "&".join(f"{k}={v}" for k, v in params.items())
    req = urllib.request.Request(url)
    try:
        with urllib.request.urlopen(req) as r:
            return json.loads(r.read())
    except urllib.error.HTTPError as e:
        return json.loads(e.read())

def section(title):
    print(f"\n{'='*60}")
    print(f"### {title} ###")
    print('='*60)

def label(name):
    print(f"\n--- {name} ---")

def out(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))

ALICE = "USR-DEMO-ALICE"
BOB = "USR-DEMO-BOB"
RAIN = "CTR-RAIN-FRIDAY"

# ── T1 Users ───────────────────────────────────────────────────
section("T1 — USER TESTS")

label("T1-1: List users")
out(get("/users"))

label("T1-2: Create user")
r = post("/users", {"username": f"smoke_{uuid.uuid4().hex[:8]}"})
out(r)
NEW_USER = r.get("data", {}).get("id", "")

label("T1-3: Create duplicate username")
out(post("/users", {"username": "alice"}))

label("T1-4: Balance (alice)")
out(get(f"/users/{ALICE}/balance"))

label("T1-5: Non-existent user")
out(get("/users/USR-NONEXISTENT"))

# ── T2 Contracts ───────────────────────────────────────────────
section("T2 — CONTRACT TESTS")

label("T2-1: List contracts")
out(get("/contracts"))

label("T2-2: Contract detail")
out(get(f"/contracts/{RAIN}"))

label("T2-3: Price history")
out(get(f"/contracts/{RAIN}/price-history"))

label("T2-4: Create contract")
r = post("/contracts", {"title": f"Smoke contract {uuid.uuid4().hex[:8]}", "category": "general"})
out(r)
NEW_CONTRACT = r.get("data", {}).get("id", "")

label("T2-5: Non-existent contract")
out(get("/contracts/CTR-NONEXISTENT-9999"))

# ── T3 Bets ────────────────────────────────────────────────────
section("T3 — BET TESTS")

label("T3-1: Quote YES 100")
out(get(f"/contracts/{NEW_CONTRACT}/quote", params={"side": "yes", "amount": 100}))

label("T3-2: New user bets YES 100")
out(post(f"/contracts/{NEW_CONTRACT}/bets", {"user_id": NEW_USER, "side": "yes", "amount": 100}))

label("T3-3: Bob bets NO 50")
out(post(f"/contracts/{NEW_CONTRACT}/bets", {"user_id": BOB, "side": "no", "amount": 50}))

label("T3-4: Bet more than balance")
out(post(f"/contracts/{NEW_CONTRACT}/bets", {"user_id": NEW_USER, "side": "yes", "amount": 5000}))

label("T3-5: Bet with invalid side")
out(post(f"/contracts/{NEW_CONTRACT}/bets", {"user_id": NEW_USER, "side": "maybe", "amount": 10}))

label("T3-6: Active positions (new user)")
out(get(f"/users/{NEW_USER}/positions"))

# ── T4 Resolution ──────────────────────────────────────────────
section("T4 — RESOLUTION TESTS")

label("T4-1: Resolve YES")
out(post(f"/admin/contracts/{NEW_CONTRACT}/resolve", {"resolution": "yes"}))

label("T4-2: Resolve again")
out(post(f"/admin/contracts/{NEW_CONTRACT}/resolve", {"resolution": "no"}))

label("T4-3: Bet on closed contract")
out(post(f"/contracts/{NEW_CONTRACT}/bets", {"user_id": BOB, "side": "yes", "amount": 10}))

label("T4-4: Bet history (new user)")
out(get(f"/users/{NEW_USER}/bets"))

label("T4-5: Statistics (bob)")
out(get(f"/users/{BOB}/statistics"))

# ── T5 Rankings ────────────────────────────────────────────────
section("T5 — RANKING TESTS")

label("T5-1: Leaderboard")
out(get("/rankings/leaderboard"))

label("T5-2: Leaderboard for Rookie tier")
out(get("/rankings/leaderboard", params={"tier": "Rookie", "limit": 5}))

label("T5-3: Ranking (new user)")
out(get(f"/users/{NEW_USER}/ranking"))

print("\n\n=== ALL TESTS COMPLETE ===\n")
