import io
import random
import unittest
import datetime

from tledger.ledger import Ledger
from tledger.balance import get_balances

# name: (type, currency)
ACCOUNTS = {
    "Cash": ("Cash", "USD"),
    "Bank": ("Assets", "USD"),
    "Food": ("Expenses", "USD"),
    "Travel": ("Expenses", "USD"),
    "Salary": ("Income", "USD"),
    "Credit Card": ("Liabilities", "USD"),
}

PAYEES = ["Walmart", "Amazon", "Starbucks", "Uber", "Employer", "Landlord"]

def random_date(rng, start, end):
    delta = end - start
    return start + datetime.timedelta(days=rng.randrange(delta.days + 1))

def generate_transaction(rng, date):
    amount = round(rng.uniform(5.0, 500.0), 2)
    debit = rng.choice(["Food", "Travel"])
    credit = rng.choice(["Cash", "Bank", "Credit Card"])
    return ("[[transaction]]\n"
            f"date = {date.isoformat()}\n"
            f'account = "{debit}"\n'
            f'payee = "{rng.choice(PAYEES)}"\n'
            f"amount = {amount}\n"
            f'offset_account = "{credit}"\n')

def generate_ledger(seed, num_transactions):
    rng = random.Random(seed)
    end = datetime.date(2024, 12, 31)
    start = end - datetime.timedelta(days=720)
    text = "# Random generated ledger\n"
    for name, (account_type, currency) in ACCOUNTS.items():
        text += ("[[account]]\n"
                 f"open = {start.isoformat()}\n"
                 f'name = "{name}"\n'
                 f'type = "{account_type}"\n'
                 f'currency = "{currency}"\n')
    for _ in range(num_transactions):
        text += generate_transaction(rng, random_date(rng, start, end))
    return text

class TestIntegration(unittest.TestCase):

    def test_random_ledger(self):
        x = Ledger.from_document(generate_ledger(1, 300))
        x.validate()
        self.assertEqual(len(x.transactions), 300)

        balances = get_balances(x.accounts, x.transactions)
        self.assertAlmostEqual(sum(balances.values()), 0.0, places=6)

        # Every period of the report adds up to the whole.
        report = x.balance_report(group="Q")
        total = x.balance_report()
        for (_, rows), (_, total_rows) in zip(report.sections,
                                              total.sections):
            for row, total_row in zip(rows, total_rows):
                self.assertEqual(row.account.name, total_row.account.name)
                self.assertAlmostEqual(sum(row.values), total_row.values[0],
                                       places=6)

        journal = x.journal()
        self.assertEqual(len(journal), 300)
        dates = [t.date for t in journal]
        self.assertEqual(dates, sorted(dates))
        out = io.StringIO()
        x.print_journal(file=out)
        self.assertEqual(len(out.getvalue().splitlines()), 600)
