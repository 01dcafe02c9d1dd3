def test_transactions_summary(client):
    payload = {
        "transactions": [
            {"date": "2024-03-15 10:30:00", "amount": 150.75},
            {"date": "2024-03-16 10:30:00", "amount": 250},
            {"date": "2024-03-17 10:30:00", "amount": 480},
            {"date": "2024-03-17 10:30:00", "amount": 90},
            {"date": "2024-03-18 10:30:00", "amount": -5},
        ]
    }

    response = client.post(
        "/blackrock/challenge/v1/transactions:summary",
        json=payload
    )

    assert response.status_code == 200

    data = response.get_json()

    assert data["totalTransactions"] == 5
    assert data["validTransactions"] == 3
    assert data["invalidTransactions"] == 2
    assert data["totalSpent"] == 880.75
    assert data["highestSpend"] == 480.0
    assert data["highestSpendDate"] == "2024-03-17 10:30:00"
    assert data["lowestSpend"] == 150.75
    assert data["totalSavingsPotential"] == 119.25
    assert data["averageSavingsPerTransaction"] == 39.75
    assert data["monthlySavingsEstimate"] == 1192.5
    assert data["annualSavingsProjection"] == 14310.0
    assert data["investmentReadinessScore"] == 67
    assert data["investmentReadinessLabel"] == "Good - Can start regular investments"
    assert data["tips"] == [
        "You have 2 invalid transactions. Review and fix them to maximize your investment pool."
    ]


def test_transactions_summary_empty(client):
    response = client.post(
        "/blackrock/challenge/v1/transactions:summary",
        json={"transactions": []}
    )

    data = response.get_json()

    assert data["investmentReadinessLabel"] == "No data"
    assert "totalSpent" not in data
