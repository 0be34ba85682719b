"""Shared fixtures: a small garage file on disk."""

import pytest

GARAGE_YAML = """
vehicles:
  - id: 1
    make: Subaru
    model: BRZ
    year: 2015
    odometer: 14800
    mileageUnit: mi
    ownerId: 1
    sharedWith: [2]
    reminders:
      - id: 1
        name: Oil Change
        intervalMiles: 5000
        lastServiceDate: '2024-01-01'
        lastServiceMiles: 10000
      - id: 2
        name: Cabin Filter
        intervalDays: 90
        lastServiceDate: 2024-02-27
        lastServiceMiles: 11000
      - id: 3
        name: Coolant
        intervalMiles: 30000
        intervalDays: 730
        lastServiceDate: '2024-01-01'
        lastServiceMiles: 10000
    fuel:
      - id: 1
        date: '2024-01-05'
        gallons: 10
        price: 30
        odometer: 1000
        location: Shell
      - id: 2
        date: '2024-02-05'
        gallons: 12
        price: 36
        odometer: 1400
    expenses:
      - id: 1
        category: Insurance
        amount: 100
        date: '2024-01-10'
      - id: 2
        category: Insurance
        amount: 50
        date: '2024-02-10'
      - id: 3
        category: Parking
        amount: 5
        date: '2024-02-11'
        notes: Downtown

  - id: 2
    make: Toyota
    model: Corolla
    year: 2019
    odometer: 81400
    mileageUnit: km
    ownerId: 2
    reminders: []
    fuel: []
    expenses: []
"""


@pytest.fixture
def garage_file(tmp_path):
    path = tmp_path / "garage.yaml"
    path.write_text(GARAGE_YAML)
    return path
