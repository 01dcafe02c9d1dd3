def test_transactions_filter(client):
    payload = {
        "q": [
            {
            "fixed": 0,
            "start": "2023-07-01 00:00:00",
            "end": "2023-07-31 23:59:59"
            }
        ],
        "p": [
            {
            "extra": 30,
            "start": "2023-10-01 00:00:00",
            "end": "2023-12-31 23:59:59"
            }
        ],
        "k": [
            {
            "start": "2023-01-01 00:00:00",
            "end": "2023-12-31 23:59:59"
            }
        ],
        "wage": 50000,
        "transactions": [
            {
                "date": "2023-12-17 08:09:45",
                "amount": -10
            }
        ]
    }

    response = client.post(
        "/blackrock/challenge/v1/transactions:filter",
        json=payload
    )

    assert response.status_code == 200
    
    data = response.get_json()
    
    assert len(data["invalid"]) == 1
    assert data["invalid"][0]["message"] == "negative amount"
    assert data["valid"] == []


def test_transactions_filter_resolves_overlays(client):
    payload = {
        "q": [{"fixed": 0, "start": "2023-07-01 00:00", "end": "2023-07-31 23:59"}],
        "p": [{"extra": 30, "start": "2023-10-01 00:00:00", "end": "2023-12-31 23:59:59"}],
        "k": [{"start": "2023-03-01 00:00:00", "end": "2023-12-31 23:59:59"}],
        "wage": 50000,
        "transactions": [
            {"date": "2023-02-28 15:49:20", "amount": 375},
            {"date": "2023-07-01 21:59:00", "amount": 620},
            {"date": "2023-10-12 20:15:30", "amount": 250},
            {"date": "2023-10-12 20:15:30", "amount": 999},
        ],
    }

    response = client.post(
        "/blackrock/challenge/v1/transactions:filter",
        json=payload
    )

    data = response.get_json()

    valid = data["valid"]
    assert [t["remanent"] for t in valid] == [25.0, 0.0, 80.0]
    assert [t["inKPeriod"] for t in valid] == [False, True, True]
    assert valid[2]["date"] == "2023-10-12 20:15:00"

    assert len(data["invalid"]) == 1
    assert data["invalid"][0]["message"] == "duplicate"
    assert data["invalid"][0]["amount"] == 999.0


def test_transactions_filter_bad_window(client):
    payload = {
        "q": [{"fixed": 0, "start": "July", "end": "2023-07-31 23:59"}],
        "transactions": [],
    }

    response = client.post(
        "/blackrock/challenge/v1/transactions:filter",
        json=payload
    )

    assert response.status_code == 422


def test_transactions_filter_same_minute_is_duplicate(client):
    payload = {
        "transactions": [
            {"date": "2024-02-01 10:00:15", "amount": 120},
            {"date": "2024-02-01 10:00:45", "amount": 130},
        ],
    }

    response = client.post(
        "/blackrock/challenge/v1/transactions:filter",
        json=payload
    )

    data = response.get_json()

    assert [t["date"] for t in data["valid"]] == ["2024-02-01 10:00:00"]
    assert data["invalid"][0]["message"] == "duplicate"
