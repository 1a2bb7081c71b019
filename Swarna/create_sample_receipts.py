import os
import django
from datetime import date, timedelta
from decimal import Decimal

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')
django.setup()

from django.contrib.auth import get_user_model

from apps.admin_receipts.services import save_admin_receipt
from apps.admin_receipts.models import AdminReceipt
from apps.clients.models import BalanceEntry, Client
from apps.clients.services import adjust_balance
from apps.receipts.calculator import GivenLine, ReceivedLine
from apps.receipts.models import Receipt
from apps.receipts.services import create_receipt

User = get_user_model()
admin_user = User.objects.filter(is_superuser=True).first()
if not admin_user:
    print("No superuser found. Run create_superuser.py first.")
    exit()

SAMPLE_CLIENTS = [
    {'shop_name': "Lakshmi Jewellers", 'client_name': "Ravi Kumar", 'phone_number': "9876543210",
     'address': "12 Bazaar Street, Coimbatore", 'opening': Decimal('2.500')},
    {'shop_name': "Sri Balaji Gold House", 'client_name': "Meena Devi", 'phone_number': "9845012345",
     'address': "4 Temple Road, Madurai", 'opening': Decimal('0')},
    {'shop_name': "Kanchana Ornaments", 'client_name': "Suresh Babu", 'phone_number': "9790011223",
     'address': "88 Big Street, Salem", 'opening': Decimal('-1.250')},
]

clients = []
for data in SAMPLE_CLIENTS:
    opening = data.pop('opening')
    client, created = Client.objects.get_or_create(phone_number=data['phone_number'], defaults=data)
    if created:
        print(f"Created client: {client}")
        if opening:
            adjust_balance(client.pk, opening, "Opening balance", user=admin_user,
                           entry_type=BalanceEntry.OPENING)
            print(f"  Opening balance {opening} g")
    clients.append(client)

if Receipt.objects.exists():
    print("Receipts already exist, skipping receipt samples.")
else:
    today = date.today()
    for offset, client in enumerate(clients):
        issue_date = today - timedelta(days=offset * 7)
        given = [
            GivenLine(item_name="Chain", gross_wt=Decimal('10'), stone_wt=Decimal('1'),
                      melting_touch=Decimal('91.6'), item_date=issue_date),
            GivenLine(item_name="Ring", tag="R-22", gross_wt=Decimal('4.250'), stone_wt=Decimal('0.350'),
                      melting_touch=Decimal('91.6'), stone_amt=Decimal('450'), item_date=issue_date),
        ]
        received = [ReceivedLine(received_gold=Decimal('8'), melting=Decimal('99.5'), item_date=issue_date)]
        if offset == len(clients) - 1:
            received = []

        receipt = create_receipt(
            Receipt(client=client, metal_type='Gold', issue_date=issue_date),
            given, received, user=admin_user,
        )
        print(f"Created receipt {receipt.voucher_id} for {client} "
              f"(opening {receipt.opening_balance}, closing {receipt.closing_balance})")

if not AdminReceipt.objects.exists():
    work = save_admin_receipt(
        AdminReceipt(client=clients[0], client_name=clients[0].client_name, given_date=date.today()),
        given_items=[{'product_name': "Fine bar", 'pure_weight': Decimal('20'),
                      'pure_percent': Decimal('99.5'), 'melting': Decimal('91.6')}],
        received_items=[],
        user=admin_user,
    )
    print(f"Created admin receipt {work.voucher_id} ({work.status})")

print("Sample data ready.")
