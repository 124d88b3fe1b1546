"""Client library and CLI for the ChromeData Automotive Description Service."""
