"""examples/payment.py - A plain script annotated with debugging comments.

Run it directly and the directives are ordinary comments. Run it through one
of the driver scripts in this directory to activate them.
"""

hits = []


def get_balance(user_id: int) -> int:
    ##[db] querying balance
    ##[db]= user_id
    return 3_000


def pay(user_id: int, amount: int) -> bool:
    ##[pay, db] payment attempt
    balance = get_balance(user_id)
    ##[pay]= user_id, amount, balance, short:balance-amount
    ##[pay]~ hits.append((user_id, amount))
    if balance < amount:
        ##[pay,err] insufficient funds
        return False
    return True


if __name__ == "__main__":
    pay(1, 5_000)
    pay(2, 100)
    ##[pay]= hits
