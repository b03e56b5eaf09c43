import unittest
from datetime import date

from tledger.accounts import Account, AccountType, strip_quotes
from tledger.transaction import Transaction, Posting
from tledger.price import Price, latest_prices

class TestAccounts(unittest.TestCase):

    def test_account_type_parse(self):
        self.assertEqual(AccountType.parse("Assets"), AccountType.ASSETS)
        self.assertEqual(AccountType.parse("Income"), AccountType.INCOME)
        self.assertEqual(AccountType.parse("Liabilities"),
                         AccountType.LIABILITIES)
        self.assertEqual(AccountType.parse("Expenses"), AccountType.EXPENSES)
        self.assertEqual(AccountType.parse("Equity"), AccountType.EQUITY)
        self.assertEqual(AccountType.parse("Stocks"), AccountType.STOCKS)
        self.assertEqual(AccountType.parse("MutualFunds"),
                         AccountType.MUTUAL_FUNDS)
        self.assertEqual(AccountType.parse("Holdings"), AccountType.HOLDINGS)
        self.assertEqual(AccountType.parse("Cash"), AccountType.CASH)
        self.assertEqual(AccountType.parse("Unknown"), AccountType.UNKNOWN)
        self.assertEqual(AccountType.parse("assets"), AccountType.UNKNOWN)
        self.assertEqual(AccountType.parse("Crypto"), AccountType.UNKNOWN)
        self.assertEqual(AccountType.parse(""), AccountType.UNKNOWN)
        self.assertEqual(AccountType.parse(AccountType.CASH),
                         AccountType.CASH)
        self.assertEqual(str(AccountType.MUTUAL_FUNDS), "MutualFunds")

    def test_account_type_order(self):
        self.assertLess(AccountType.ASSETS.order, AccountType.INCOME.order)
        self.assertEqual(AccountType.UNKNOWN.order, len(AccountType) - 1)

    def test_strip_quotes(self):
        for x in ['"Savings"', 'Sav"ings', '""', 'Savings', '"a" "b"']:
            once = strip_quotes(x)
            self.assertNotIn('"', once)
            self.assertEqual(strip_quotes(once), once)
        self.assertEqual(strip_quotes('"Savings Account"'), "Savings Account")

    def test_account_new(self):
        a = Account('"Test Account"', date(2023, 10, 13), '"EUR"',
                    "Income", 1000.0)
        self.assertEqual(a.name, "Test Account")
        self.assertEqual(a.currency, "EUR")
        self.assertEqual(a.account_type, AccountType.INCOME)
        self.assertEqual(a.open, date(2023, 10, 13))
        self.assertEqual(a.opening_balance, 1000.0)
        b = Account("Test Account", date(2023, 10, 13), "EUR",
                    AccountType.INCOME, 1000.0)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        c = Account("Test Account", date(2023, 10, 13), "EUR", "Income")
        self.assertIsNone(c.opening_balance)
        self.assertNotEqual(a, c)
        with self.assertRaises(AttributeError):
            a.name = "other"

    def test_transaction_new(self):
        t = Transaction(date(2023, 1, 2), '"Dining"', 20.0, '"Wallet"')
        self.assertEqual(t.account, "Dining")
        self.assertEqual(t.offset_account, "Wallet")
        self.assertEqual(t.offset_amount, -20.0)
        self.assertEqual(t.quantity, 1.0)
        self.assertIsNone(t.payee)
        self.assertIsNone(t.note)
        t = Transaction(date(2023, 1, 2), "VOO", 2.0, "Broker", -781.0,
                        quantity=390.5, payee="Exchange")
        self.assertEqual(t.offset_amount, -781.0)
        self.assertEqual(t.postings(), (
            Posting(date(2023, 1, 2), "VOO", 2.0, "Exchange"),
            Posting(date(2023, 1, 2), "Broker", -781.0, None),
        ))

    def test_transaction_default_offset_is_exact(self):
        for amount in [0.1, 1e-7, 123456.789, -42.25, 0.0]:
            t = Transaction(date(2023, 1, 2), "A", amount, "B")
            self.assertEqual(t.offset_amount, -amount)
            self.assertEqual(t.amount + t.offset_amount, 0)

    def test_price_new(self):
        p1 = Price(date(2023, 10, 13), '"Gold"', 1500.0, "USD")
        self.assertEqual(p1.commodity, "Gold")
        self.assertEqual(p1.price, 1500.0)
        p2 = Price(date(2023, 10, 14), "Gold", 1550.0, "USD")
        self.assertNotEqual(p1, p2)
        self.assertEqual(p1, Price(date(2023, 10, 13), "Gold", 1500.0, "USD"))

    def test_latest_prices(self):
        prices = [
            Price(date(2023, 10, 2), "ARS", 0.00125, "USD"),
            Price(date(2023, 10, 5), "ARS", 0.001, "USD"),
            Price(date(2023, 10, 1), "ARS", 0.002, "USD"),
            Price(date(2023, 9, 30), "VOO", 390.5, "USD"),
            Price(date(2023, 9, 30), "VOO", 391.0, "USD"),
            Price(date(2023, 12, 1), "VOO", 350.0, "EUR"),
        ]
        self.assertEqual(latest_prices(prices, "USD"),
                         {"ARS": 0.001, "VOO": 390.5})
        self.assertEqual(latest_prices(prices, "EUR"), {"VOO": 350.0})
        self.assertEqual(latest_prices(prices, "JPY"), {})
