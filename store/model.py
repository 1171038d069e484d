"""In-memory section/option store that the loader writes into."""

import re
from typing import Dict, List, Optional, Tuple


DEFAULT_SECTION = "DEFAULT"

# Maximum nesting of %(name)s references before giving up.
MAX_INTERPOLATION_DEPTH = 200

_VARIABLE = re.compile(r"%\(([a-zA-Z0-9_.\-]+)\)s")

BOOLEAN_STATES = {
    "1": True, "t": True, "true": True, "y": True, "yes": True, "on": True,
    "0": False, "f": False, "false": False, "n": False, "no": False, "off": False,
}


class StoreError(Exception):
    """Base class for lookup and interpolation failures."""


class NoSectionError(StoreError, KeyError):
    def __init__(self, section: str):
        self.section = section
        super().__init__(f"section not found: {section}")
    
    def __str__(self) -> str:
        return self.args[0]


class NoOptionError(StoreError, KeyError):
    def __init__(self, section: str, option: str):
        self.section = section
        self.option = option
        super().__init__(f"option not found: {section}.{option}")
    
    def __str__(self) -> str:
        return self.args[0]


class InterpolationMissingOptionError(StoreError):
    def __init__(self, section: str, option: str, reference: str):
        self.section = section
        self.option = option
        self.reference = reference
        super().__init__(f"{section}.{option} references unknown option %({reference})s")


class InterpolationDepthError(StoreError):
    def __init__(self, section: str, option: str):
        self.section = section
        self.option = option
        super().__init__(
            f"{section}.{option}: more than {MAX_INTERPOLATION_DEPTH} nested references, possible cycle"
        )


class ConfigStore:
    """
    Sections of options, kept in insertion order.
    
    The empty section name is an alias for ``DEFAULT_SECTION``. Options in
    the default section are visible from every other section through
    ``get`` and ``options``, unless the section defines the same name.
    """
    
    def __init__(self, default_section: str = DEFAULT_SECTION):
        self.default_section = default_section
        self._sections: Dict[str, Dict[str, str]] = {default_section: {}}
    
    def _name(self, section: str) -> str:
        return section or self.default_section
    
    def add_section(self, section: str) -> bool:
        """Ensure the section exists. Returns True if it was created."""
        section = self._name(section)
        if section in self._sections:
            return False
        self._sections[section] = {}
        return True
    
    def add_option(self, section: str, option: str, value: str) -> bool:
        """
        Set an option, creating its section if needed.
        
        Returns True if the option is new, False if an existing value was
        overwritten.
        """
        options = self._sections.setdefault(self._name(section), {})
        is_new = option not in options
        options[option] = value
        return is_new
    
    def update(self, other: "ConfigStore") -> None:
        """Copy every section and raw option of ``other`` into this store, overwriting."""
        for section, options in other._sections.items():
            if section == other.default_section:
                section = self.default_section
            self.add_section(section)
            for option, value in options.items():
                self.add_option(section, option, value)
    
    def remove_section(self, section: str) -> bool:
        section = self._name(section)
        if section == self.default_section or section not in self._sections:
            return False
        del self._sections[section]
        return True
    
    def remove_option(self, section: str, option: str) -> bool:
        options = self._sections.get(self._name(section))
        if options is None or option not in options:
            return False
        del options[option]
        return True
    
    def get_raw_option(self, section: str, option: str) -> Optional[str]:
        """Return the stored value exactly as read, or None. No default fallback."""
        return self._sections.get(self._name(section), {}).get(option)
    
    def has_section(self, section: str) -> bool:
        return self._name(section) in self._sections
    
    def has_option(self, section: str, option: str) -> bool:
        """Check for an option in the section or, failing that, the default section."""
        options = self._sections.get(self._name(section))
        if options is None:
            return False
        return option in options or option in self._sections[self.default_section]
    
    def sections(self) -> List[str]:
        """Return section names in the order they were first seen."""
        return list(self._sections)
    
    def options(self, section: str) -> List[str]:
        """Return the section's options followed by inherited default options."""
        section = self._name(section)
        if section not in self._sections:
            raise NoSectionError(section)
        
        names = list(self._sections[section])
        if section != self.default_section:
            names.extend(
                name for name in self._sections[self.default_section]
                if name not in self._sections[section]
            )
        return names
    
    def raw_items(self, section: str) -> List[Tuple[str, str]]:
        """Return (option, raw value) pairs defined in the section itself."""
        section = self._name(section)
        if section not in self._sections:
            raise NoSectionError(section)
        return list(self._sections[section].items())
    
    def items(self, section: str, raw: bool = False) -> List[Tuple[str, str]]:
        """Return (option, value) pairs including inherited default options."""
        return [(name, self.get(section, name, raw=raw)) for name in self.options(section)]
    
    def _lookup(self, section: str, option: str) -> Optional[str]:
        value = self._sections[section].get(option)
        if value is None:
            value = self._sections[self.default_section].get(option)
        return value
    
    def get(self, section: str, option: str, raw: bool = False) -> str:
        """
        Return an option's value.
        
        Falls back to the default section when the option is not defined
        in ``section``. Unless ``raw`` is set, ``%(name)s`` references are
        replaced by the value of ``name``, looked up the same way.
        
        Raises:
            NoSectionError: If the section does not exist.
            NoOptionError: If neither the section nor the default section
                defines the option.
            InterpolationMissingOptionError: If a reference names an
                unknown option.
            InterpolationDepthError: If references nest too deeply.
        """
        section = self._name(section)
        if section not in self._sections:
            raise NoSectionError(section)
        
        value = self._lookup(section, option)
        if value is None:
            raise NoOptionError(section, option)
        if raw:
            return value
        
        for _ in range(MAX_INTERPOLATION_DEPTH):
            match = _VARIABLE.search(value)
            if match is None:
                return value
            reference = match.group(1)
            replacement = self._lookup(section, reference)
            if replacement is None:
                raise InterpolationMissingOptionError(section, option, reference)
            value = value[:match.start()] + replacement + value[match.end():]
        
        raise InterpolationDepthError(section, option)
    
    def getint(self, section: str, option: str) -> int:
        return int(self.get(section, option))
    
    def getfloat(self, section: str, option: str) -> float:
        return float(self.get(section, option))
    
    def getboolean(self, section: str, option: str) -> bool:
        value = self.get(section, option)
        try:
            return BOOLEAN_STATES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"not a boolean: {value!r}") from None
    
    def to_dict(self, expand: bool = False, include_empty_default: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Return a plain ``{section: {option: value}}`` copy.
        
        Only options defined in each section are included; default options
        are not copied into every section. With ``expand``, values are
        interpolated.
        """
        data: Dict[str, Dict[str, str]] = {}
        for section, options in self._sections.items():
            if section == self.default_section and not options and not include_empty_default:
                continue
            if expand:
                data[section] = {name: self.get(section, name) for name in options}
            else:
                data[section] = dict(options)
        return data
    
    def __contains__(self, section: str) -> bool:
        return self.has_section(section)
    
    def __len__(self) -> int:
        return len(self._sections)
    
    def __repr__(self) -> str:
        option_count = sum(len(o) for o in self._sections.values())
        return f"ConfigStore(sections={len(self._sections)}, options={option_count})"
