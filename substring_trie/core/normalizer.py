"""Text normalization utilities used to derive insertion key variants."""

import unicodedata


class TextNormalizer:
    """Handles the case and diacritic transforms applied to trie keys."""

    def __init__(self, normalization_form: str = "NFC") -> None:
        """
        Initialize the normalizer.

        Args:
            normalization_form: Unicode form stripped text is recomposed into
        """
        self.normalization_form = normalization_form

    def lowercase(self, text: str) -> str:
        """
        Lowercase text using full Unicode case mapping.

        Args:
            text: Input text

        Returns:
            Lowercased text
        """
        if not text:
            return ""

        return text.lower()

    def strip_diacritics(self, text: str) -> str:
        """
        Remove combining diacritical marks from text.

        Characters are decomposed, nonspacing marks are dropped and the
        remainder is recomposed. Text without diacritics comes back unchanged.

        Args:
            text: Input text

        Returns:
            Text without diacritics
        """
        if not text:
            return ""

        # Split base characters from their combining marks
        decomposed = unicodedata.normalize("NFD", text)

        stripped = "".join(
            char for char in decomposed if unicodedata.category(char) != "Mn"
        )

        if stripped == decomposed:
            return text

        return unicodedata.normalize(self.normalization_form, stripped)
