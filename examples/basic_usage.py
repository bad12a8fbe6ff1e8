import asyncio
import logging

from dotenv import load_dotenv

from eigenda import EigenDAClient, EigenDAError


async def main():
    # ==========================================================================
    # 1. Build the client (EIGENDA_PRIVATE_KEY, API_URL, ... come from .env)
    # ==========================================================================
    print("🚀 Step 1: initializing client...")
    try:
        client = EigenDAClient()
    except EigenDAError as e:
        print(f"❌ Initialization failed: {e}")
        return
    print(f"✅ Client ready, account: {client.address}")

    async with client:
        # ======================================================================
        # 2. Upload some content
        # ======================================================================
        print("\n🚀 Step 2: uploading content...")
        content = "Hello from the EigenDA Python SDK!"
        try:
            upload = await client.upload(content)
        except EigenDAError as e:
            print(f"❌ Upload failed: {e}")
            return
        print("✅ Upload accepted")
        print(f"   - Job ID: {upload.job_id}")
        print(f"   - Request ID: {upload.request_id}")

        # ======================================================================
        # 3. Wait for the job and retrieve it back
        # ======================================================================
        print("\n🚀 Step 3: waiting for confirmation (this takes several minutes)...")
        try:
            retrieved = await client.retrieve(job_id=upload.job_id, wait_for_completion=True)
        except EigenDAError as e:
            print(f"❌ Retrieval failed: {e}")
            return

        print(f"✅ Retrieved: {retrieved}")
        if isinstance(retrieved, dict) and retrieved.get("content") == content:
            print("   - Content matches the upload")


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
