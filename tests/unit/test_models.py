from city_coords.common.models import City, State


def test_state_to_dict_omits_empty_cities_and_keeps_field_order():
    state = State(id=1, country_id=1, name="California", state_code="CA")

    payload = state.to_dict()

    assert "cities" not in payload
    assert list(payload) == ["id", "country_id", "name", "state_code", "latitude", "longitude"]
    assert payload["latitude"] is None


def test_state_to_dict_nests_cities():
    state = State(
        id=1,
        country_id=1,
        name="California",
        cities=(City(id=7, name="Los Angeles", latitude="34.0522", longitude="-118.2437"),),
    )

    payload = state.to_dict()

    assert payload["cities"] == [
        {"id": 7, "name": "Los Angeles", "latitude": "34.0522", "longitude": "-118.2437"}
    ]
