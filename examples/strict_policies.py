"""
Strict Policies Example

Isolated instance with duplicate prevention and missing-handler checks.
"""
import asyncio

from intercom import AlreadyExistsError, NoHandlerError, create_intercom_instance


async def main():
    bus = create_intercom_instance(
        {
            "prevent_duplicated_event_listeners": True,
            "throw_error_if_no_event_handler_found": True,
        }
    )

    try:
        bus.emit("app.started")
    except NoHandlerError as e:
        print(f"{e.code}: {e}")

    bus.on_event("app.started", lambda _: print("Started"))
    try:
        bus.on_event("app.started", lambda _: print("Started again"))
    except AlreadyExistsError as e:
        print(f"{e.code}: {e}")

    bus.emit("app.started")

    # Missing responders resolve to None when relaxed per call
    result = await bus.request("app.version", config={"throw_error_if_no_method_handler_found": False})
    print(f"Version: {result}")

    await asyncio.sleep(0)


if __name__ == "__main__":
    asyncio.run(main())
