import asyncio
import logging
import os

from dotenv import load_dotenv

from eigenda import EigenDAClient, EigenDAError


async def main():
    print("🚀 Step 1: initializing client...")
    try:
        client = EigenDAClient()
    except EigenDAError as e:
        print(f"❌ Initialization failed: {e}")
        return
    print(f"✅ Client ready, account: {client.address}")

    async with client:
        # ======================================================================
        # 2. Reuse an existing identifier or create one
        # ======================================================================
        print("\n🚀 Step 2: looking up identifiers...")
        identifiers = await client.get_identifiers()
        for identifier in identifiers:
            print(f"   - 0x{identifier.hex()}")

        if identifiers:
            identifier = identifiers[0]
        else:
            print("   No identifiers yet, creating one...")
            identifier = await client.create_identifier()
            print(f"✅ Created identifier 0x{identifier.hex()}")

        owner = await client.get_identifier_owner(identifier)
        print(f"   - Owner: {owner}")

        # ======================================================================
        # 3. Balance and top-up
        # ======================================================================
        print("\n🚀 Step 3: checking balance...")
        balance = await client.get_balance(identifier)
        print(f"   - Balance: {balance} ETH")

        amount = os.getenv("TOPUP_AMOUNT", "0.001")
        print(f"\n🚀 Step 4: topping up {amount} ETH...")
        try:
            result = await client.topup_credits(identifier, amount)
        except EigenDAError as e:
            print(f"❌ Top-up failed: {e}")
            return
        print(f"{'✅' if result.succeeded else '❌'} Top-up {result.status}: {result.transaction_hash}")
        print(f"   - New balance: {await client.get_balance(identifier)} ETH")

        # ======================================================================
        # 5. Upload charged to the identifier
        # ======================================================================
        print("\n🚀 Step 5: uploading with identifier...")
        upload = await client.upload("Paid for with credits", identifier=identifier)
        print(f"✅ Job ID: {upload.job_id}")

        status = await client.get_status(upload.job_id)
        print(f"   - Current status: {status.status.value}")


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
