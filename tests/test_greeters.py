from services.greeters import (
    ChineseGreeter,
    EnglishGreeter,
    FrenchGreeter,
    GreetingService,
    build_greeting_service,
)


def test_english_greeter():
    assert EnglishGreeter().greet("Ada") == "Hello, Ada!"


def test_chinese_greeter_name_order():
    assert ChineseGreeter().greet("Ada") == "Ada，你好！"
    assert ChineseGreeter(name_first=False).greet("Ada") == "你好，Ada！"


def test_french_greeter_name_order():
    assert FrenchGreeter().greet("Ada") == "Ada, Bonjour"
    assert FrenchGreeter(name_first=False).greet("Ada") == "Bonjour，Ada！"


def test_service_dispatches_by_exact_language():
    service = build_greeting_service()
    assert service.languages == ["en", "zh", "fr"]
    assert service.greet("zh", "Ada") == "你好，Ada！"
    assert service.greet("fr", "Ada") == "Ada, Bonjour"
    assert service.greet("fr-FR", "Ada") == "Hello, Ada!"
    assert service.greet(None, "Ada") == "Hello, Ada!"


def test_service_without_greeters_uses_default():
    service = GreetingService()
    assert service.find("en") is None
    assert service.greet("en", "Ada") == "Hello, Ada!"

    service.register(FrenchGreeter(name_first=False))
    assert service.greet("fr", "Ada") == "Bonjour，Ada！"


def test_module_is_documented():
    import services.greeters

    assert services.greeters.__doc__.strip().startswith("Greeters for each supported language")
