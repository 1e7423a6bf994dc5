"""
Events and Methods Example

Two components talking through the shared intercom without holding
references to each other.
"""
import asyncio

from intercom import CallbackHandler, default_intercom as intercom


class Inventory:
    def __init__(self):
        self.stock = {"apple": 3, "pear": 0}

        intercom.on_request("inventory.count", self.count)
        intercom.on_request("inventory.reserve", CallbackHandler(self.reserve))

    async def count(self, item):
        return self.stock.get(item, 0)

    def reserve(self, item, callback):
        if self.stock.get(item, 0) < 1:
            callback(ValueError(f"{item} is out of stock"))
            return
        self.stock[item] -= 1
        intercom.emit("inventory.reserved", {"item": item, "left": self.stock[item]})
        callback(None, self.stock[item])


async def main():
    Inventory()

    intercom.on_event("inventory.reserved", lambda p: print(f"Reserved one {p['item']}, {p['left']} left"))

    print(f"Apples in stock: {await intercom.request('inventory.count', 'apple')}")

    # Deferred mode
    await intercom.request("inventory.reserve", "apple")

    # Callback mode
    done = asyncio.Event()

    def on_reserved(error, result):
        print(f"Pear reservation failed: {error}" if error else f"Pears left: {result}")
        done.set()

    intercom.request("inventory.reserve", "pear", None, on_reserved)
    await done.wait()


if __name__ == "__main__":
    asyncio.run(main())
