# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.structure.io.pdb"
__author__ = "The Pepcraft contributors"
__all__ = ["PDBFile"]

import warnings
import numpy as np
from pepcraft.file import TextFile
from pepcraft.structure.error import ParseError, UnknownResidueWarning
from pepcraft.structure.info.amino_acids import normalize_code, pdb_residue_name
from pepcraft.structure.residue import Residue

_PDB_MAX_ATOMS = 99999
_PDB_MAX_RESIDUES = 9999
# Coordinates must fit into '{:>8.3f}'
_PDB_MAX_COORD = 9999.999
_PDB_MIN_COORD = -999.999

# Each residue is represented by its C-alpha atom
_REPRESENTATIVE_ATOM = "CA"
_PLACEHOLDER_ELEMENT = "C"
_CHAIN_ID = "A"

# slice objects for readability
# ATOM records
_record = slice(0, 6)
_atom_name = slice(12, 16)
_res_name = slice(17, 20)
_chain_id = slice(21, 22)
_res_id = slice(22, 26)
_ins_code = slice(26, 27)
_coord_x = slice(30, 38)
_coord_y = slice(38, 46)
_coord_z = slice(46, 54)


class PDBFile(TextFile):
    r"""
    This class represents a PDB file containing a coarse grained
    protein structure, where each residue is represented by a single
    atom.

    When reading a file, only the *C-alpha* atoms of the *ATOM* records
    in the first model are considered.
    When writing, each residue is written as one *ATOM* record with a
    *C-alpha* atom, followed by a single *END* record.
    Bonds between residues are neither written nor read.

    Examples
    --------
    Load a `\\*.pdb` file and write the residues into a new file:

    >>> import os.path
    >>> file = PDBFile.read(os.path.join(path_to_structures, "ca_fragment.pdb"))
    >>> residues = file.get_residues()
    >>> file = PDBFile()
    >>> file.set_residues(residues)
    >>> file.write(os.path.join(path_to_directory, "ca_fragment_copy.pdb"))
    """

    @classmethod
    def read(cls, file):
        file = super().read(file)
        # Pad lines with whitespace if lines are shorter
        # than the required 80 characters
        file.lines = [line.ljust(80) for line in file.lines]
        return file

    def get_residues(self):
        """
        Create residues from the *C-alpha* atoms in the file.

        Each residue gets a new ID, the identity rotation and no bond.
        Residues with a residue name that does not belong to one of the
        20 canonical amino acids are skipped with an
        :class:`UnknownResidueWarning`.
        Only the first alternate location of each residue is used.

        Returns
        -------
        residues : list of Residue
            The residues in the order of the records in the file.

        Raises
        ------
        ParseError
            If the coordinates of a record cannot be read.
        """
        residues = []
        skipped_names = []
        last_residue_key = None
        for i, line in enumerate(self.lines):
            if line.startswith("ENDMDL"):
                # Only the first model is read
                break
            if line[_record].strip() != "ATOM":
                continue
            if line[_atom_name].strip() != _REPRESENTATIVE_ATOM:
                continue
            residue_key = (line[_chain_id], line[_res_id], line[_ins_code])
            if residue_key == last_residue_key:
                # Another alternate location of the same residue
                continue
            last_residue_key = residue_key

            res_name = line[_res_name].strip()
            # One- and two-letter residue names refer to nucleotides
            code = normalize_code(res_name) if len(res_name) == 3 else None
            if code is None:
                skipped_names.append(res_name)
                continue
            try:
                position = [
                    float(line[_coord_x]),
                    float(line[_coord_y]),
                    float(line[_coord_z]),
                ]
            except ValueError:
                raise ParseError(
                    f"Invalid coordinates in line {i + 1}: '{line.rstrip()}'"
                )
            residues.append(Residue(code, position))

        if len(skipped_names) > 0:
            warnings.warn(
                f"{len(skipped_names)} residue(s) with unknown residue names "
                f"were skipped: {', '.join(sorted(set(skipped_names)))}",
                UnknownResidueWarning,
            )
        return residues

    def set_residues(self, residues):
        """
        Set the residues of the file.

        The residues are written in the given order, the index of each
        residue is used as atom and residue number.
        Each residue is written as *C-alpha* atom of chain ``'A'`` with
        occupancy 1 and temperature factor 0.
        Compatibility with the PDB format is not checked here,
        use :func:`check_residues()` before.

        Parameters
        ----------
        residues : iterable of Residue
            The residues to be written.
        """
        self.lines = []
        for i, residue in enumerate(residues):
            atom_id = i % _PDB_MAX_ATOMS + 1
            res_id = i % _PDB_MAX_RESIDUES + 1
            res_name = pdb_residue_name(residue.type)
            if res_name is None:
                res_name = str(residue.type).upper()[:3]
            x, y, z = residue.position
            self.lines.append(
                f"{'ATOM':6}{atom_id:>5d} {' ' + _REPRESENTATIVE_ATOM:4} "
                f"{res_name:>3} {_CHAIN_ID}{res_id:>4d}    "
                f"{x:>8.3f}{y:>8.3f}{z:>8.3f}{1.0:>6.2f}{0.0:>6.2f}"
                f"{'':10}{_PLACEHOLDER_ELEMENT:>2}"
            )
        self.lines.append("END")

    @staticmethod
    def check_residues(residues):
        """
        Check whether residues can be written into a PDB file and read
        back without loss of information.

        Parameters
        ----------
        residues : sequence of Residue
            The residues to be checked.

        Returns
        -------
        problems : list of str
            A description of each problem found.
            The list is empty, if the residues are compatible.
        """
        problems = []
        if len(residues) == 0:
            problems.append("The structure contains no residues")
        elif len(residues) > _PDB_MAX_ATOMS:
            problems.append(
                f"The structure contains {len(residues)} residues, "
                f"but the PDB format supports at most {_PDB_MAX_ATOMS}"
            )
        for i, residue in enumerate(residues):
            position = residue.position
            if not np.isfinite(position).all():
                problems.append(
                    f"Residue {i + 1} ({residue.type}) has non-finite "
                    f"coordinates {position.tolist()}"
                )
            elif (position > _PDB_MAX_COORD).any() or (
                position < _PDB_MIN_COORD
            ).any():
                problems.append(
                    f"Residue {i + 1} ({residue.type}) has coordinates "
                    f"{position.tolist()} that exceed the PDB coordinate "
                    f"field width"
                )
            if pdb_residue_name(residue.type) is None:
                problems.append(
                    f"Residue {i + 1} has the unknown amino acid type "
                    f"'{residue.type}'"
                )
        return problems
