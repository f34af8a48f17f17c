# =============================================================================
# tests/test_favorites_api.py - Favorites Endpoint Tests
# =============================================================================

import pytest

from tests.conftest import ALICE, API, BOB


def _add(client, headers, favorite_type="market", target_id="m1", target_name="Mercado Central"):
    return client.post(
        f"{API}/favorites",
        json={"type": favorite_type, "target_id": target_id, "target_name": target_name},
        headers=headers,
    )


class TestFavorites:
    """Tests for GET/POST/DELETE /favorites."""

    def test_empty_for_new_user(self, client, alice_headers):
        response = client.get(f"{API}/favorites", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {"favorites": {"markets": [], "vendors": []}}

    def test_add_market_and_vendor(self, client, alice_headers, store):
        _add(client, alice_headers)
        response = _add(client, alice_headers, "vendor", "v1", "Banca do Zé")

        assert response.status_code == 200
        favorites = response.json()["favorites"]
        assert [item["id"] for item in favorites["markets"]] == ["m1"]
        assert favorites["vendors"][0]["name"] == "Banca do Zé"
        assert favorites["vendors"][0]["added_at"]
        assert store.get(f"favorites:{ALICE.id}") == favorites

    def test_add_is_idempotent(self, client, alice_headers):
        first = _add(client, alice_headers).json()["favorites"]
        second = _add(client, alice_headers, target_name="Renamed").json()["favorites"]

        assert second == first
        assert len(second["markets"]) == 1

    def test_remove(self, client, alice_headers):
        _add(client, alice_headers)
        _add(client, alice_headers, target_id="m2")

        response = client.delete(f"{API}/favorites/market/m1", headers=alice_headers)

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["favorites"]["markets"]] == ["m2"]

    def test_remove_missing_is_a_no_op(self, client, alice_headers):
        _add(client, alice_headers)

        response = client.delete(f"{API}/favorites/vendor/m1", headers=alice_headers)

        assert response.status_code == 200
        favorites = response.json()["favorites"]
        assert [item["id"] for item in favorites["markets"]] == ["m1"]
        assert favorites["vendors"] == []

    def test_unknown_type_is_400(self, client, alice_headers):
        assert _add(client, alice_headers, favorite_type="stall").status_code == 400
        response = client.delete(f"{API}/favorites/stall/m1", headers=alice_headers)
        assert response.status_code == 400

    def test_users_do_not_share_favorites(self, client, alice_headers, bob_headers):
        _add(client, alice_headers)

        bob_favorites = client.get(f"{API}/favorites", headers=bob_headers).json()["favorites"]

        assert bob_favorites == {"markets": [], "vendors": []}

    @pytest.mark.parametrize(
        "stored",
        [
            None,
            "garbage",
            {"markets": "not-a-list"},
            {"markets": [{"id": "m1", "name": "A", "added_at": "x"}, "junk", {"name": "no id"}]},
        ],
    )
    def test_malformed_document_reads_as_lists(self, client, store, bob_headers, stored):
        if stored is not None:
            store.set(f"favorites:{BOB.id}", stored)

        favorites = client.get(f"{API}/favorites", headers=bob_headers).json()["favorites"]

        assert isinstance(favorites["markets"], list)
        assert favorites["vendors"] == []
        assert all("id" in item for item in favorites["markets"])

        # Reading repairs the response only; the stored document is untouched
        assert store.get(f"favorites:{BOB.id}") == stored

    def test_requires_auth(self, client):
        assert client.get(f"{API}/favorites").status_code == 401
        assert client.delete(f"{API}/favorites/market/m1").status_code == 401
