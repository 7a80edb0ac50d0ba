#!/usr/bin/env python3
"""
Seed data script for the expense tracker.
Creates the sample categories and three months of sample expenses for one user.
"""

import sys

from categories.service import CategoryService
from expenses.service import ExpenseService


SAMPLE_CATEGORIES = [
    {'name': 'Food', 'color': '#FF6B6B', 'icon': 'utensils'},
    {'name': 'Transport', 'color': '#4ECDC4', 'icon': 'car'},
    {'name': 'Shopping', 'color': '#FFE66D', 'icon': 'shopping-bag'},
    {'name': 'Entertainment', 'color': '#95E1D3', 'icon': 'film'},
    {'name': 'Bills', 'color': '#A8DADC', 'icon': 'file-text'},
    {'name': 'Health', 'color': '#F38181', 'icon': 'heart'},
]

# (amount, description, category name, date)
SAMPLE_EXPENSES = [
    (85.50, 'Grocery shopping at Whole Foods', 'Food', '2024-11-02'),
    (42.00, 'Uber ride to airport', 'Transport', '2024-11-05'),
    (1200.00, 'Rent payment', 'Bills', '2024-11-01'),
    (32.00, 'Lunch at Italian restaurant', 'Food', '2024-11-08'),
    (89.99, 'New running shoes', 'Shopping', '2024-11-12'),
    (15.99, 'Netflix subscription', 'Entertainment', '2024-11-15'),
    (55.00, 'Gas station fill-up', 'Transport', '2024-11-18'),
    (49.99, 'Gym membership', 'Health', '2024-11-20'),
    (125.00, 'Electric utility', 'Bills', '2024-11-22'),
    (45.20, 'Dinner delivery from UberEats', 'Food', '2024-12-03'),
    (1200.00, 'Rent payment', 'Bills', '2024-12-01'),
    (95.00, 'Concert tickets', 'Entertainment', '2024-12-07'),
    (120.00, 'Monthly parking permit', 'Transport', '2024-12-10'),
    (125.50, 'Clothes shopping at H&M', 'Shopping', '2024-12-14'),
    (8.75, 'Coffee and pastry', 'Food', '2024-12-16'),
    (79.99, 'Internet bill', 'Bills', '2024-12-18'),
    (25.00, 'Doctor copay', 'Health', '2024-12-21'),
    (149.00, 'Electronics - wireless headphones', 'Shopping', '2024-12-23'),
    (28.50, 'Weekend brunch', 'Food', '2025-01-04'),
    (1200.00, 'Rent payment', 'Bills', '2025-01-01'),
    (90.00, 'Bus pass', 'Transport', '2025-01-08'),
    (42.50, 'Movie night with friends', 'Entertainment', '2025-01-10'),
    (67.25, 'Home decor items', 'Shopping', '2025-01-13'),
    (18.50, 'Prescription medication', 'Health', '2025-01-16'),
    (65.00, 'Phone bill', 'Bills', '2025-01-20'),
]


def seed_categories(category_service, user_id):
    """Seed sample categories and return their IDs by name."""
    print(f"Creating {len(SAMPLE_CATEGORIES)} sample categories...")

    category_ids = {}
    for category_data in SAMPLE_CATEGORIES:
        category = category_service.create_category(user_id, dict(category_data))
        category_ids[category.name] = category.id

    print(f"Created {len(category_ids)} categories")
    return category_ids


def seed_expenses(expense_service, user_id, category_ids):
    """Seed sample expenses."""
    print(f"Creating {len(SAMPLE_EXPENSES)} sample expenses...")

    expenses = []
    for amount, description, category_name, date in SAMPLE_EXPENSES:
        expense = expense_service.create_expense(user_id, {
            'amount': amount,
            'description': description,
            'categoryId': category_ids[category_name],
            'date': f"{date}T00:00:00.000Z"
        })
        expenses.append(expense)

    print(f"Created {len(expenses)} expenses")
    return expenses


def main():
    """Main function."""
    print("=" * 50)
    print("Expense Tracker - Seed Data Script")
    print("=" * 50)

    user_id = input("\nEnter user ID (Cognito sub) to seed data for (default: test-user-123): ").strip()
    if not user_id:
        user_id = 'test-user-123'

    category_service = CategoryService()
    expense_service = ExpenseService()

    try:
        print("\nSeeding categories...")
        category_ids = seed_categories(category_service, user_id)

        print("\nSeeding expenses...")
        expenses = seed_expenses(expense_service, user_id, category_ids)
    except Exception as e:
        print(f"Error: seeding failed: {e}")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("Data seeding complete!")
    print("=" * 50)
    print(f"\nCreated:")
    print(f"  - {len(category_ids)} categories")
    print(f"  - {len(expenses)} expenses")
    print(f"\nFor user: {user_id}")


if __name__ == '__main__':
    main()
