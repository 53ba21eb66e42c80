# gsearch/utils/i18n.py

"""Internationalization support."""
import locale


class Translator:
    """Simple translation system for CLI messages."""

    def __init__(self):
        self.current_lang = 'en'
        self.translations = {
            'en': {
                # Results
                'found_results': 'Found {} result(s):',
                'no_results': 'No results found.',

                # Statistics
                'stats_title': 'Database Statistics:',
                'stats_version': 'Format version',
                'stats_folders': 'Folders',
                'stats_files': 'Files',
                'stats_total': 'Total entries',
                'stats_flags': 'Index flags',
                'stats_sorted_arrays': 'Sorted arrays',

                # Errors
                'error': 'Error',
                'load_failed': 'failed to load database {}: {}',
                'invalid_format': 'invalid database file {}: {}',
            },
            'de': {
                # Results
                'found_results': '{} Ergebnis(se) gefunden:',
                'no_results': 'Keine Ergebnisse gefunden.',

                # Statistics
                'stats_title': 'Datenbank-Statistik:',
                'stats_version': 'Formatversion',
                'stats_folders': 'Ordner',
                'stats_files': 'Dateien',
                'stats_total': 'Einträge gesamt',
                'stats_flags': 'Index-Flags',
                'stats_sorted_arrays': 'Sortierte Arrays',

                # Errors
                'error': 'Fehler',
                'load_failed': 'Datenbank {} konnte nicht geladen werden: {}',
                'invalid_format': 'Ungültige Datenbankdatei {}: {}',
            }
        }

        # Auto-detect system language
        system_lang = locale.getlocale()[0]
        if system_lang and system_lang.startswith('de'):
            self.current_lang = 'de'

    def set_language(self, lang_code: str):
        """Set the current language."""
        if lang_code in self.translations:
            self.current_lang = lang_code

    def get(self, key: str, *args) -> str:
        """Get translated string, with optional formatting."""
        text = self.translations[self.current_lang].get(key, key)
        if args:
            return text.format(*args)
        return text


# Global translator instance
translator = Translator()
